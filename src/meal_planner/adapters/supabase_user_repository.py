"""Supabase-backed user repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from meal_planner.domain.models import UserRecord
from meal_planner.services.users import UserRepository


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user lookups."""

    client: Client

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the internal id, if present."""
        response = (
            self.client.table("users")
            .select("id, firebase_uid")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def get_by_firebase_uid(self, firebase_uid: str) -> UserRecord | None:
        """Return the user with the Firebase uid, if present."""
        response = (
            self.client.table("users")
            .select("id, firebase_uid")
            .eq("firebase_uid", firebase_uid)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None


def _parse_user(row: dict[str, object]) -> UserRecord:
    return UserRecord(
        id=UUID(str(row["id"])),
        firebase_uid=str(row["firebase_uid"]) if row.get("firebase_uid") else None,
    )
