from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from jose import JWTError, jwt

from hrauth.credential_store import Credential, CredentialStore
from hrclient.constants import (
    EMAIL_CLAIMS,
    LOGGER,
    LOGIN_ROUTE,
    PERMISSION_CLAIMS,
    ROLE_CLAIMS,
    USER_ID_CLAIMS,
    USER_NAME_CLAIMS,
)

MODULE_ACTIONS = ("View", "Create", "Edit", "Delete")


class SessionManager:
    """Owns the end of a session.

    ``logout`` is the only path that clears credentials besides a failed
    refresh. It navigates once per session: repeated calls only make sure
    the store is empty.
    """

    def __init__(
        self,
        store: CredentialStore,
        *,
        navigate: Callable[[str], None] | None = None,
        login_route: str = LOGIN_ROUTE,
        logger: logging.Logger | None = None,
    ) -> None:
        self._store = store
        self._navigate = navigate
        self._login_route = login_route
        self._logger = logger or LOGGER
        self._logged_out = False

    @property
    def logged_out(self) -> bool:
        return self._logged_out

    def start(self, credential: Credential) -> None:
        self._store.set(credential)
        self._logged_out = False

    def logout(self) -> None:
        self._store.clear()
        if self._logged_out:
            return
        self._logged_out = True
        self._logger.info("Session ended; navigating to %s", self._login_route)
        if self._navigate is not None:
            self._navigate(self._login_route)


@dataclass
class UserIdentity:
    id: str
    email: str
    user_name: str
    roles: list[str]
    permissions: list[str]


@dataclass
class ModulePermissions:
    can_view: bool
    can_create: bool
    can_edit: bool
    can_delete: bool


def _first_claim(claims: dict, names: tuple[str, ...]) -> object:
    for name in names:
        value = claims.get(name)
        if value:
            return value
    return None


def _as_list(value: object) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item]
    return [str(value)] if value else []


def decode_claims(token: str) -> dict:
    try:
        return jwt.get_unverified_claims(token)
    except JWTError as error:
        LOGGER.warning("Could not decode access token claims: %s", error)
        return {}


class SessionClaims:
    """Role and permission queries over the current access token.

    A guarded action is granted when the caller holds any of the listed roles
    or any of the listed permissions. On its own, ``has_role([])`` or
    ``has_permission([])`` is satisfied by any authenticated session, but
    ``is_authorized`` only lets an empty list through when both are empty.
    """

    def __init__(self, store: CredentialStore) -> None:
        self._store = store

    def _claims(self) -> dict | None:
        credential = self._store.get()
        if credential is None:
            return None
        return decode_claims(credential.access_token)

    def is_authenticated(self) -> bool:
        return self._store.get() is not None

    def roles(self) -> list[str]:
        claims = self._claims()
        if not claims:
            return []
        return _as_list(_first_claim(claims, ROLE_CLAIMS))

    def permissions(self) -> list[str]:
        claims = self._claims()
        if not claims:
            return []
        return _as_list(_first_claim(claims, PERMISSION_CLAIMS))

    def has_role(self, roles: list[str]) -> bool:
        if not self.is_authenticated():
            return False
        if not roles:
            return True
        held = set(self.roles())
        return any(role in held for role in roles)

    def has_permission(self, permissions: list[str]) -> bool:
        if not self.is_authenticated():
            return False
        if not permissions:
            return True
        held = set(self.permissions())
        return any(permission in held for permission in permissions)

    def has_all_permissions(self, permissions: list[str]) -> bool:
        if not self.is_authenticated():
            return False
        held = set(self.permissions())
        return all(permission in held for permission in permissions)

    def is_authorized(self, roles: list[str], permissions: list[str]) -> bool:
        # Only a listed requirement can grant; with nothing listed, a session suffices.
        if not roles and not permissions:
            return self.is_authenticated()
        return (bool(roles) and self.has_role(roles)) or (
            bool(permissions) and self.has_permission(permissions)
        )

    def module_permissions(self, module: str) -> ModulePermissions:
        flags = [self.has_permission([f"{module}:{action}"]) for action in MODULE_ACTIONS]
        return ModulePermissions(*flags)

    def current_user(self) -> UserIdentity | None:
        claims = self._claims()
        if not claims:
            return None
        return UserIdentity(
            id=str(_first_claim(claims, USER_ID_CLAIMS) or ""),
            email=str(_first_claim(claims, EMAIL_CLAIMS) or ""),
            user_name=str(_first_claim(claims, USER_NAME_CLAIMS) or ""),
            roles=_as_list(_first_claim(claims, ROLE_CLAIMS)),
            permissions=_as_list(_first_claim(claims, PERMISSION_CLAIMS)),
        )
