"""Custom exceptions for predmarket."""


class PredmarketError(Exception):
    """Base exception for all predmarket errors."""

    def __init__(self, message: str, *args: object) -> None:
        self.message = message
        super().__init__(message, *args)


# Market errors
class MarketError(PredmarketError):
    """Base error for market layer."""


class MarketNotFoundError(MarketError):
    """No market with the requested id."""

    def __init__(self, market_id: str) -> None:
        self.market_id = market_id
        super().__init__(f"Market '{market_id}' not found")


# Storage errors
class StorageError(PredmarketError):
    """Base error for storage layer."""


class DatabaseConnectionError(StorageError):
    """Failed to connect to database."""
