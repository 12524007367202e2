from typing import Optional


def get_requester_id(event: dict) -> Optional[str]:
    """Return the caller's user id set by the authorizer, or None for guests.

    Guest policies carry no context, so API Gateway passes only the
    ``principalId`` through and ``user_id`` is absent.
    """
    authorizer = (event.get("requestContext") or {}).get("authorizer") or {}
    user_id = authorizer.get("user_id")
    return user_id or None
