"""
Domain errors raised below the routers and translated into HTTP responses.

Not-found outcomes are reported by the store as None/False and turned into
HTTPException(404) by the router; only payload validation needs its own type.
"""

INVALID_JSON_MESSAGE = "Invalid JSON payload"


# PUBLIC_INTERFACE
class InvalidPayload(Exception):
    """Raised when a submitted payload string is not syntactically valid JSON."""

    def __init__(self, message: str = INVALID_JSON_MESSAGE):
        super().__init__(message)
        self.message = message
