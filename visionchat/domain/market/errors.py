"""
Domain-specific errors for the market bounded context.

These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class MarketDomainError(Exception):
    """Base error for all market domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class SymbolNotFoundError(MarketDomainError):
    """Raised when the exchange does not list a trading pair."""

    def __init__(self, symbol: str) -> None:
        super().__init__(f"Symbol {symbol} not found on Binance")
        self.symbol = symbol


class MarketDataUnavailableError(MarketDomainError):
    """Raised when an upstream market API fails or returns garbage."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Failed to fetch {source}: {reason}")
        self.source = source
        self.reason = reason


class UpstreamRateLimitedError(MarketDomainError):
    """Raised when an upstream API throttles us and nothing is cached."""

    def __init__(self, source: str) -> None:
        super().__init__("Rate limit exceeded. Please try again later.")
        self.source = source
