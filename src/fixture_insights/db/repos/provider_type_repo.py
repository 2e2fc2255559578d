from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.orm import Session

from fixture_insights.db.models.provider_type import ProviderType
from fixture_insights.db.repos.base import BaseRepository


def _opt_str(value: Any) -> str | None:
    return value.strip() if isinstance(value, str) and value.strip() else None


def _opt_int(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


class ProviderTypeRepository(BaseRepository[ProviderType]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, ProviderType)

    def upsert_many(
        self,
        items: Iterable[Mapping[str, Any]],
        *,
        synced_at: datetime | None = None,
    ) -> tuple[int, int]:
        """Insert or update catalog entries keyed by provider id.

        Returns (inserted, updated). Entries without an integer id are skipped;
        a `parent_id` that is not in the same batch or table is stored as None.
        """

        when = synced_at or datetime.now(UTC)
        # Last occurrence wins when the provider repeats an id across pages.
        by_id = {int(i["id"]): i for i in items if _opt_int(i.get("id")) is not None}
        batch = list(by_id.values())
        batch_ids = set(by_id)

        inserted = 0
        updated = 0
        for item in batch:
            type_id = int(item["id"])
            parent_id = _opt_int(item.get("parent_id"))
            if parent_id is not None and parent_id not in batch_ids and self.get(parent_id) is None:
                parent_id = None

            values = {
                "name": _opt_str(item.get("name")) or "",
                "code": _opt_str(item.get("code")),
                "developer_name": _opt_str(item.get("developer_name")),
                "model_type": _opt_str(item.get("model_type")),
                "stat_group": _opt_str(item.get("stat_group")),
                "parent_id": parent_id,
                "last_synced_at": when,
            }

            existing = self.get(type_id)
            if existing is None:
                self.session.add(ProviderType(id=type_id, **values))
                inserted += 1
            else:
                for key, value in values.items():
                    setattr(existing, key, value)
                updated += 1

        self.session.flush()
        return inserted, updated

    def by_code(self) -> dict[str, ProviderType]:
        return {row.code: row for row in self.all() if row.code}

    def by_model_type(self, model_type: str) -> list[ProviderType]:
        return self.where(ProviderType.model_type == model_type)
