"""User lookup for plan generation."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from meal_planner.domain.models import UserRecord


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the internal id, if present."""

    def get_by_firebase_uid(self, firebase_uid: str) -> UserRecord | None:
        """Return the user with the auth provider uid, if present."""


@dataclass
class UserService:
    """Application service for resolving users."""

    repository: UserRepository

    def find_user(self, identifier: str) -> UserRecord | None:
        """Resolve a user by internal id or by auth provider uid."""
        try:
            user_id = UUID(identifier)
        except ValueError:
            return self.repository.get_by_firebase_uid(identifier)
        existing = self.repository.get_by_id(user_id)
        if existing:
            return existing
        return self.repository.get_by_firebase_uid(identifier)
