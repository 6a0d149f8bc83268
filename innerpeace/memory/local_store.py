import time
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel

from innerpeace.memory.schemas import ORDER_FIELDS, RECORD_TYPES, UserProfile


def synthesize_id(kind: str) -> str:
    """`{kind}-{millis}-{suffix}`; the random suffix keeps same-millisecond writes apart."""
    return f"{kind}-{int(time.time() * 1000)}-{uuid4().hex[:8]}"


class LocalFallbackStore:
    """Process-lifetime, in-memory collections per record kind.

    Serves as the store of record in demo mode and as the emergency
    fallback whenever a remote call fails. Nothing survives a restart
    and nothing is evicted.
    """

    def __init__(self):
        self._collections: dict[str, list] = {kind: [] for kind in RECORD_TYPES}
        self._profiles: dict[str, UserProfile] = {}

    def insert(self, kind: str, record: BaseModel) -> BaseModel:
        stored = record.model_copy(deep=True)
        if not stored.id:
            stored.id = synthesize_id(kind)
        self._collections[kind].append(stored)
        return stored.model_copy(deep=True)

    def query(self, kind: str, user_id: str, limit: int) -> list:
        order_field = ORDER_FIELDS[kind]
        owned = [r for r in self._collections[kind] if r.user_id == user_id]
        owned.sort(key=lambda r: getattr(r, order_field), reverse=True)
        return [r.model_copy(deep=True) for r in owned[:max(limit, 0)]]

    def update_by_id(self, kind: str, record_id: str, fields: dict):
        records = self._collections[kind]
        for index, record in enumerate(records):
            if record.id == record_id:
                changes = {
                    k: v for k, v in fields.items()
                    if v is not None and k not in ("id", "user_id")
                }
                merged = {**record.model_dump(), **changes}
                records[index] = RECORD_TYPES[kind].model_validate(merged)
                return

    def delete_by_id(self, kind: str, record_id: str):
        self._collections[kind] = [r for r in self._collections[kind] if r.id != record_id]

    def put_profile(self, user_id: str, profile: UserProfile):
        self._profiles[user_id] = profile.model_copy(deep=True)

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        profile = self._profiles.get(user_id)
        return profile.model_copy(deep=True) if profile else None

    def count(self, kind: str) -> int:
        return len(self._collections[kind])

    def clear(self):
        for records in self._collections.values():
            records.clear()
        self._profiles.clear()
