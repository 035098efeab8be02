"""
user_service.py - User lookup
Single responsibility: read-only access to profiles for pickers and labels.
"""
from ids_manager.database.repositories import profiles as profile_repo
from ids_manager.domain.errors import NotFound
from ids_manager.domain.models import Profile
from ids_manager.services.guard import ServiceBase


class UserService(ServiceBase):
    def get(self, user_id: str) -> Profile:
        with self._connection("fetch user") as conn:
            profile = profile_repo.get(conn, user_id)
        if profile is None:
            raise NotFound("Profile", user_id)
        return profile

    def count(self) -> int:
        with self._connection("count users") as conn:
            return profile_repo.count(conn)

    def list(self) -> list[Profile]:
        with self._connection("fetch users") as conn:
            return profile_repo.list_all(conn)
