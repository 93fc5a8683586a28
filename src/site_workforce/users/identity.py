from __future__ import annotations

from typing import Optional, Protocol

from flask import has_request_context, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, UnauthenticatedError
from .model import CurrentUser


class IdentityProvider(Protocol):
    """Identity collaborator: who is acting right now, if anyone."""

    def current_user(self) -> Optional[CurrentUser]:
        raise NotImplementedError


class SessionIdentityProvider:
    """Reads the user the auth layer stored into the Flask session."""

    def current_user(self) -> Optional[CurrentUser]:
        if not has_request_context() or "user_id" not in session:
            return None
        try:
            role = Role(session.get("role"))
        except ValueError:
            return None
        return CurrentUser(user_id=str(session["user_id"]), role=role)


class StaticIdentityProvider:
    """Fixed identity for scripts and tests."""

    def __init__(self, user: Optional[CurrentUser] = None):
        self.user = user

    def current_user(self) -> Optional[CurrentUser]:
        return self.user


def require_user(identity: IdentityProvider) -> CurrentUser:
    user = identity.current_user()
    if user is None:
        raise UnauthenticatedError("User not authenticated")
    return user


def require_admin(identity: IdentityProvider) -> CurrentUser:
    user = require_user(identity)
    if not user.is_admin:
        raise AuthorizationError("Only admins can perform this action")
    return user
