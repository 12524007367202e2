import logging
import os
import jwt

logger = logging.getLogger()
logger.setLevel(logging.INFO)

JWT_SECRET = os.environ.get("JWT_SECRET")
JWT_ALGORITHM = os.environ.get("JWT_ALGORITHM", "HS256")

GUEST_PRINCIPAL = "guest"

if not JWT_SECRET:
    raise RuntimeError("JWT_SECRET environment variable is not set")


def _generate_policy(principal_id, effect, resource, context=None):
    auth_response = {
        "principalId": principal_id,
        "policyDocument": {
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Action": "execute-api:Invoke",
                    "Effect": effect,
                    "Resource": resource,
                }
            ],
        },
    }

    if context:
        auth_response["context"] = {
            k: str(v) for k, v in context.items()
        }

    return auth_response


def _get_stage_arn(method_arn: str) -> str:
    parts = method_arn.split("/")
    return "/".join(parts[:2]) + "/*/*"


def lambda_handler(event, context):
    """Booking routes accept guests: a missing token is let through without
    identity, a bad one is denied."""
    resource = _get_stage_arn(event["methodArn"])
    headers = event.get("headers") or {}
    token = headers.get("Authorization") or headers.get("authorization")

    if not token:
        # no context: handlers read a missing user_id as a guest (see common.utils.identity)
        return _generate_policy(GUEST_PRINCIPAL, "Allow", resource)

    if token.startswith("Bearer "):
        token = token.removeprefix("Bearer ")

    try:
        decoded = jwt.decode(
            token,
            JWT_SECRET,
            algorithms=[JWT_ALGORITHM],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError:
        logger.info("Authorization failed: Token expired")
        return _generate_policy("unauthorized", "Deny", resource)
    except jwt.InvalidTokenError as e:
        logger.info(f"Authorization failed: Invalid token {e}")
        return _generate_policy("unauthorized", "Deny", resource)

    user_id = decoded.get("user_id") or decoded.get("id")
    if not user_id:
        logger.info("Authorization failed: Missing user_id in token")
        return _generate_policy("unauthorized", "Deny", resource)

    return _generate_policy(
        principal_id=user_id,
        effect="Allow",
        resource=resource,
        context={
            "user_id": user_id,
            "email": decoded.get("email", ""),
        },
    )
