from __future__ import annotations

import logging
from enum import Enum
from functools import wraps
from typing import Optional, Type, TypeVar

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DataUnavailableError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (DataUnavailableError, 503),
)


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Please sign in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return json_error("Please sign in to continue", 401)
            if session.get("role") not in allowed:
                return json_error("You do not have access to this action", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def domain_errors(action: str):
    """Turn domain exceptions into JSON errors; anything else is a logged 500."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except tuple(err for err, _ in _STATUS_BY_ERROR) as e:
                status = next(code for err, code in _STATUS_BY_ERROR if isinstance(e, err))
                return json_error(str(e), status)
            except Exception:
                logger.exception("Unexpected failure while trying to %s", action)
                return json_error(f"System error while trying to {action}", 500)

        return wrapper

    return decorator


def json_body() -> dict:
    return request.get_json(silent=True) or {}


def parse_enum(enum_cls: Type[E], value: Optional[str], field_name: str) -> Optional[E]:
    if value in (None, ""):
        return None
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"Invalid {field_name}: {value!r}")
