"""
identity.py - Identity providers
Single responsibility: tell services who the current user is.
"""
import getpass
import logging
import sqlite3

from ids_manager.config import USER_EMAIL_DOMAIN
from ids_manager.database.connection import Store
from ids_manager.database.repositories import profiles as profile_repo
from ids_manager.domain.errors import StoreError
from ids_manager.domain.models import Profile

logger = logging.getLogger(__name__)


class StaticIdentity:
    """Identity held in memory; the login form switches it."""

    def __init__(self, profile: Profile | None = None):
        self._profile = profile

    def get_current_user(self) -> Profile | None:
        return self._profile

    def sign_in(self, profile: Profile) -> None:
        self._profile = profile

    def sign_out(self) -> None:
        self._profile = None


class OsUserIdentity:
    """
    OS のログインユーザーをプロフィールに対応付ける。
    初回利用時にプロフィール行を登録する（プロフィールを書くのはここだけ）。
    """

    def __init__(self, store: Store, domain: str = USER_EMAIL_DOMAIN):
        self.store = store
        self.domain = domain
        self._profile: Profile | None = None
        self._signed_out = False

    def get_current_user(self) -> Profile | None:
        if self._signed_out:
            return None
        if self._profile is not None:
            return self._profile
        try:
            name = getpass.getuser()
        except (KeyError, OSError):
            logger.warning("Could not resolve OS user name", exc_info=True)
            return None
        profile = Profile(id=name, email=f"{name}@{self.domain}")
        self._profile = self._register(profile)
        return self._profile

    def _register(self, profile: Profile) -> Profile:
        try:
            with self.store.connection() as conn:
                profile_repo.ensure(conn, profile)
                return profile_repo.get(conn, profile.id) or profile
        except sqlite3.Error as e:
            logger.error("Failed to register profile %s: %s", profile.id, e)
            raise StoreError(f"Failed to register profile {profile.id}", details=e) from e

    def sign_in(self, profile: Profile) -> None:
        self._profile = self._register(profile)
        self._signed_out = False

    def sign_out(self) -> None:
        # サインアウト後は OS ユーザーへ自動で戻らない
        self._profile = None
        self._signed_out = True
