from fastapi import Request

from errors import UnauthorizedError


async def get_current_user_id(request: Request) -> int:
    """
    Verify the bearer token in the Authorization header

    Args:
        request: FastAPI request object

    Returns:
        Id of the authenticated user

    Raises:
        UnauthorizedError: If token is missing, invalid, or expired
    """
    auth_header = request.headers.get("Authorization")

    if not auth_header:
        raise UnauthorizedError("Missing Authorization header")

    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise UnauthorizedError("Invalid Authorization header format. Expected: Bearer <token>")

    token = parts[1]
    user_id = request.app.state.jwt_manager.get_user_id_from_token(token)

    if user_id is None:
        raise UnauthorizedError("Invalid or expired token")

    # Attach user info to request state
    request.state.user_id = user_id
    return user_id
