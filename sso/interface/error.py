"""Interface layer errors."""

from fastapi import HTTPException, status

# Generic message shown to end users; the error kind is only logged
AUTHENTICATION_FAILED = "authentication failed"


def authentication_failed() -> HTTPException:
    """Build the generic login failure response."""
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED, detail=AUTHENTICATION_FAILED
    )
