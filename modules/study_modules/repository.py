"""
Study module repository for database access.

Encapsulates all Supabase queries and data mapping for the ``modules`` table.
Every read and write is filtered on ``user_id`` so a caller can never touch
another user's rows.
"""

from typing import Optional, Any

from shared.repository import BaseRepository
from .models import Module, DEFAULT_TOKEN, TABLE_NAME


class ModuleRepository(BaseRepository[Module]):
    """
    Repository for module data access.

    All methods take the owner's user ID explicitly and return Pydantic
    models mapped from database rows. Methods return None (or an empty
    list) when no owned row matches; the service turns that into the
    appropriate error.
    """

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_by_id(self, module_id: str, user_id: str) -> Optional[Module]:
        """
        Get one module by ID, scoped to its owner.

        Args:
            module_id: The module UUID.
            user_id: The caller's user ID.

        Returns:
            The module, or None if it does not exist or is owned by someone else.
        """
        query = (
            self._db.table(TABLE_NAME)
            .select("*")
            .eq("id", module_id)
            .eq("user_id", user_id)
            .limit(1)
        )
        result = self._execute(query)

        if not result.data:
            return None
        return self._map_to_module(result.data[0])

    def list_for_user(
        self,
        user_id: str,
        limit: int,
        after: Optional[Module] = None,
        archived: Optional[bool] = None,
    ) -> list[Module]:
        """
        List a user's modules, most recently visited first.

        Rows are ordered by ``(last_visited DESC, id DESC)``. The id
        tie-break keeps pages stable when several modules share a
        ``last_visited`` value.

        Args:
            user_id: The caller's user ID.
            limit: Maximum number of rows to return.
            after: Anchor module; only rows strictly after it in the ordering are returned.
            archived: Filter by archived flag, or None for all modules.

        Returns:
            Up to ``limit`` modules.
        """
        query = self._db.table(TABLE_NAME).select("*").eq("user_id", user_id)

        if archived is not None:
            query = query.eq("archived", archived)

        if after is not None:
            anchor = after.last_visited.isoformat()
            query = query.or_(
                f'last_visited.lt."{anchor}",'
                f'and(last_visited.eq."{anchor}",id.lt.{after.id})'
            )

        query = (
            query.order("last_visited", desc=True)
            .order("id", desc=True)
            .limit(limit)
        )
        result = self._execute(query)

        return [self._map_to_module(row) for row in result.data]

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def insert(self, data: dict[str, Any]) -> Module:
        """
        Insert a module row.

        Args:
            data: Column values, including ``user_id``.

        Returns:
            Created Module with its generated ID.
        """
        result = self._execute(self._db.table(TABLE_NAME).insert(data))
        return self._map_to_module(result.data[0])

    def update(
        self,
        module_id: str,
        user_id: str,
        data: dict[str, Any],
    ) -> Optional[Module]:
        """
        Apply column updates to an owned module.

        Args:
            module_id: The module UUID.
            user_id: The caller's user ID.
            data: Column values to set.

        Returns:
            The updated Module, or None when zero rows matched id + owner.
        """
        query = (
            self._db.table(TABLE_NAME)
            .update(data)
            .eq("id", module_id)
            .eq("user_id", user_id)
        )
        result = self._execute(query)

        if not result.data:
            return None
        return self._map_to_module(result.data[0])

    # -------------------------------------------------------------------------
    # Private mapping methods
    # -------------------------------------------------------------------------

    def _map_to_module(self, data: dict[str, Any]) -> Module:
        """Map database row to Module model."""
        return Module(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            name=data["name"],
            description=data.get("description"),
            code=data["code"],
            icon=data.get("icon") or DEFAULT_TOKEN,
            color=data.get("color") or DEFAULT_TOKEN,
            archived=bool(data.get("archived", False)),
            credits=data.get("credits", 0),
            created_at=data["created_at"],
            modified_at=data["modified_at"],
            last_visited=data["last_visited"],
        )
