"""Domain models for the meal planner."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    firebase_uid: str | None
