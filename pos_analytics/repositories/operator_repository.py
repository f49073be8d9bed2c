"""
Operator (cashier) directory (Supabase).

Resolves cashier ids to display names from the legacy `users` table.
"""

from __future__ import annotations

from typing import Optional

from supabase import Client

from pos_analytics.repositories.client import get_supabase

_USERS_TABLE: str = "users"


class SupabaseOperatorRepository:
    def __init__(self, client: Optional[Client] = None):
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_supabase()
        return self._client

    def display_name(self, operator_id: str) -> Optional[str]:
        """'First Last' for the user, or None if the user does not exist."""

        response = (
            self.client.table(_USERS_TABLE)
            .select("firstName, lastName")
            .eq("id", operator_id)
            .limit(1)
            .execute()
        )
        error = getattr(response, "error", None)
        if error:
            raise RuntimeError(f"Failed to get user: {error}")

        rows = getattr(response, "data", None) or []
        if not rows:
            return None

        parts = [rows[0].get("firstName"), rows[0].get("lastName")]
        name = " ".join(str(p) for p in parts if p)
        return name or None


__all__ = ["SupabaseOperatorRepository"]
