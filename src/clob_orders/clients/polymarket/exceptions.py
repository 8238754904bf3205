"""Exceptions raised by the CLOB market-data client.

Transport and HTTP failures surface as ``PolymarketAPIError`` carrying the
status code, so the calling layer can decide whether to retry.
"""


class PolymarketError(Exception):
    """Base exception for all CLOB client errors."""


class PolymarketAPIError(PolymarketError):
    """Failed CLOB API request.

    Args:
        msg: Human-readable description of the failure.
        status_code: HTTP status code, or 0 when no response was received.

    """

    def __init__(self, msg: str, status_code: int) -> None:
        """Initialize the error with a message and status code."""
        super().__init__(f"[{status_code}] {msg}")
        self.msg = msg
        self.status_code = status_code
