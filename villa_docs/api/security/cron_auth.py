import hmac
from typing import Optional

from ..errors import AuthorizationError


def verify_cron_secret(authorization: Optional[str], secret: str) -> None:
    """
    Check an Authorization header against the shared scheduler secret.

    Raises:
        AuthorizationError: if no secret is configured, the header is missing,
            or it is not exactly "Bearer <secret>"
    """
    if not secret:
        raise AuthorizationError("Unauthorized", details={"error": "Scheduler secret not configured"})
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthorizationError("Unauthorized")

    token = authorization.split(" ", 1)[1]
    if not hmac.compare_digest(token.encode(), secret.encode()):
        raise AuthorizationError("Unauthorized")
