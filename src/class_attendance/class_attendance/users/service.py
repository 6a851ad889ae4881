from __future__ import annotations

import logging
from typing import Mapping

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from .model import DemoAccount, SessionUser

logger = logging.getLogger(__name__)


def build_accounts(demo_users: Mapping[str, Mapping[str, str]]) -> dict[Role, DemoAccount]:
    """Turn settings ``DEMO_USERS`` into hashed accounts.

    Entries may carry either ``password`` (hashed here) or ``password_hash``.
    """

    accounts: dict[Role, DemoAccount] = {}
    for role_s, cfg in demo_users.items():
        role = Role(role_s)
        password_hash = cfg.get("password_hash") or generate_password_hash(cfg["password"])
        accounts[role] = DemoAccount(role=role, username=cfg["username"], password_hash=password_hash)
    return accounts


class AuthService:
    """Use case: authenticate against the per-role demo credentials."""

    def __init__(self, accounts: Mapping[Role, DemoAccount]):
        self._accounts = dict(accounts)

    def authenticate(self, username: str, password: str, role) -> SessionUser:
        if not (username or "").strip() or not (password or "").strip():
            raise ValidationError("Please enter both username and password")

        try:
            role = Role(role)
        except ValueError:
            raise AuthenticationError("Invalid username or password")

        account = self._accounts.get(role)
        if not account or account.username != username.strip():
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(account.password_hash, password)
        except Exception:
            # Malformed hashes in settings count as a failed login.
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password")

        logger.info("Login: %s (%s)", account.username, role.value)
        return SessionUser(username=account.username, role=role)
