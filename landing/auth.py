"""Session-backed admin capability.

The session cookie carries two fields, ``userId`` and ``isAdmin``. Routes never
read ``request.session`` directly; they depend on :func:`get_session_context`
(or :func:`require_admin`) and receive an immutable :class:`SessionContext`.
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request

from . import models

SESSION_USER_ID = "userId"
SESSION_IS_ADMIN = "isAdmin"


class AdminRequired(Exception):
    """Raised when a mutating route is called without an admin session."""


@dataclass(frozen=True)
class SessionContext:
    user_id: Optional[int] = None
    is_admin: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None


def get_session_context(request: Request) -> SessionContext:
    user_id = request.session.get(SESSION_USER_ID)
    if not isinstance(user_id, int):
        return SessionContext()
    return SessionContext(
        user_id=user_id, is_admin=bool(request.session.get(SESSION_IS_ADMIN))
    )


def require_admin(
    context: SessionContext = Depends(get_session_context),
) -> SessionContext:
    if not context.is_admin:
        raise AdminRequired()
    return context


def check_password(user: Optional[models.User], password: str) -> bool:
    # plain-text comparison, see models.User.password
    return user is not None and user.password == password


def start_session(request: Request, user: models.User) -> None:
    request.session[SESSION_USER_ID] = user.id
    request.session[SESSION_IS_ADMIN] = bool(user.is_admin)


def end_session(request: Request) -> None:
    request.session.clear()
