"""FastAPI dependencies that turn identity headers into a Principal.

The gateway in front of this service authenticates the caller and forwards
the result as ``X-User-Id`` and ``X-User-Role``. Routes receive the
principal explicitly and pass its fields into commands.
"""

from fastapi import Header, HTTPException

from identity.principal import Principal, Role


def _principal_from(user_id, role) -> Principal | None:
    if not user_id or not user_id.strip():
        return None
    try:
        parsed_role = Role((role or Role.USER.value).strip().upper())
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown role: {role}")
    return Principal(user_id=user_id.strip(), role=parsed_role)


def optional_principal(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Principal | None:
    """The caller if signed in, else None."""
    return _principal_from(x_user_id, x_user_role)


def current_principal(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Principal:
    """The signed-in caller; 401 when the identity headers are missing."""
    principal = _principal_from(x_user_id, x_user_role)
    if principal is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return principal


def moderator_principal(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Principal:
    """The signed-in caller; 403 unless they may moderate."""
    principal = current_principal(x_user_id, x_user_role)
    if not principal.can_moderate:
        raise HTTPException(status_code=403, detail="Moderator role required")
    return principal
