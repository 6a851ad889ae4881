from __future__ import annotations

from dataclasses import dataclass
from typing import Any, MutableMapping, Optional

from ..core.enums import Role

SESSION_AUTH_KEY = "authenticated"
SESSION_ROLE_KEY = "role"
SESSION_USERNAME_KEY = "username"


@dataclass(frozen=True)
class DemoAccount:
    """Fixed login for one role; the password is a werkzeug hash."""

    role: Role
    username: str
    password_hash: str


@dataclass(frozen=True)
class SessionUser:
    """Authenticated identity, created at login and dropped at logout."""

    username: str
    role: Role

    def store(self, session: MutableMapping[str, Any]) -> None:
        session[SESSION_AUTH_KEY] = True
        session[SESSION_ROLE_KEY] = self.role.value
        session[SESSION_USERNAME_KEY] = self.username

    @classmethod
    def load(cls, session: MutableMapping[str, Any]) -> Optional["SessionUser"]:
        if not session.get(SESSION_AUTH_KEY):
            return None
        try:
            role = Role(session.get(SESSION_ROLE_KEY))
        except ValueError:
            return None
        return cls(username=str(session.get(SESSION_USERNAME_KEY) or ""), role=role)

    @staticmethod
    def clear(session: MutableMapping[str, Any]) -> None:
        for key in (SESSION_AUTH_KEY, SESSION_ROLE_KEY, SESSION_USERNAME_KEY):
            session.pop(key, None)
