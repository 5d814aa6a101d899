"""Supabase-backed user directory."""

from collections.abc import Iterable
from dataclasses import dataclass

from supabase import Client

from lunch_picker.services.users import UserDirectory


@dataclass
class SupabaseUserRepository(UserDirectory):
    """Supabase implementation for the authorized user directory."""

    client: Client

    def exists(self, username: str) -> bool:
        """Return whether the username is present."""
        response = (
            self.client.table("users")
            .select("username")
            .eq("username", username)
            .limit(1)
            .execute()
        )
        return bool(response.data)

    def list_usernames(self) -> list[str]:
        """Return all usernames ordered alphabetically."""
        response = (
            self.client.table("users").select("username").order("username").execute()
        )
        return [row["username"] for row in response.data or []]

    def add_usernames(self, usernames: Iterable[str]) -> None:
        """Upsert usernames so re-imports are harmless."""
        rows = [{"username": name} for name in usernames]
        if not rows:
            return
        self.client.table("users").upsert(rows, on_conflict="username").execute()
