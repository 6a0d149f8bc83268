from datetime import date, datetime
from typing import Any, Optional
from uuid import uuid4

from pydantic import BaseModel, ValidationError
from sqlalchemy import select

from innerpeace.core.logger import logger
from innerpeace.memory.database import create_engine_for, init_db, session_factory
from innerpeace.memory.models import COLLECTIONS, UserProfileDocument
from innerpeace.memory.schemas import ORDER_FIELDS, RECORD_TYPES, UserProfile, as_aware

# Routing columns live outside the JSON body.
ROUTING_FIELDS = {"id", "user_id"}


def strip_absent(document: dict) -> dict:
    """Drop keys whose value is None, recursing into nested dicts only.

    Lists, datetimes and dates are passed through untouched.
    """
    cleaned = {}
    for key, value in document.items():
        if value is None:
            continue
        if isinstance(value, dict):
            cleaned[key] = strip_absent(value)
        else:
            cleaned[key] = value
    return cleaned


def to_document(value: Any) -> Any:
    """Convert datetimes into the store's ISO-8601 representation."""
    if isinstance(value, datetime):
        return as_aware(value).isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: to_document(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_document(item) for item in value]
    return value


def _payload(fields: dict) -> dict:
    payload = strip_absent({k: v for k, v in fields.items() if k not in ROUTING_FIELDS})
    if isinstance(payload.get("messages"), list):
        payload["messages"] = [
            strip_absent(m) if isinstance(m, dict) else m for m in payload["messages"]
        ]
    return payload


class SqlDocumentStore:
    """Remote document store backed by SQLAlchemy's asyncio engine.

    Collections are tables holding a JSON `document` per row, filterable
    by `user_id` and ordered by the indexed `timestamp` column.
    """

    def __init__(self, url: str, engine=None):
        self.url = url
        self._engine = engine or create_engine_for(url)
        self._sessions = session_factory(self._engine)
        self._ready = False

    async def _ensure_schema(self):
        if not self._ready:
            await init_db(self._engine)
            self._ready = True

    async def insert(self, kind: str, record: BaseModel) -> str:
        await self._ensure_schema()
        table = COLLECTIONS[kind]
        fields = record.model_dump()
        row = table(
            id=uuid4().hex,
            user_id=record.user_id,
            timestamp=as_aware(fields[ORDER_FIELDS[kind]]),
            document=to_document(_payload(fields)),
        )
        async with self._sessions() as session:
            session.add(row)
            await session.commit()
        return row.id

    async def query(self, kind: str, user_id: str, limit: int) -> list:
        await self._ensure_schema()
        table = COLLECTIONS[kind]
        stmt = (
            select(table)
            .where(table.user_id == user_id)
            .order_by(table.timestamp.desc())
            .limit(limit)
        )
        async with self._sessions() as session:
            rows = (await session.execute(stmt)).scalars().all()
        record_type = RECORD_TYPES[kind]
        return [
            record_type.model_validate({**row.document, "id": row.id, "user_id": row.user_id})
            for row in rows
        ]

    async def update_by_id(self, kind: str, record_id: str, fields: dict):
        await self._ensure_schema()
        table = COLLECTIONS[kind]
        changes = _payload(fields)
        async with self._sessions() as session:
            row = await session.get(table, record_id)
            if row is None:
                logger.debug("No {} document {} to update", kind, record_id)
                return
            document = dict(row.document)
            document.update(to_document(changes))
            try:
                merged = RECORD_TYPES[kind].model_validate(
                    {**document, "id": row.id, "user_id": row.user_id}
                )
            except ValidationError as e:
                logger.error("Rejected update of {} document {}: {}", kind, record_id, e)
                return
            # Reassign so the JSON column is flagged dirty.
            row.document = document
            order_field = ORDER_FIELDS[kind]
            if order_field in changes:
                row.timestamp = getattr(merged, order_field)
            await session.commit()

    async def delete_by_id(self, kind: str, record_id: str):
        await self._ensure_schema()
        table = COLLECTIONS[kind]
        async with self._sessions() as session:
            row = await session.get(table, record_id)
            if row is None:
                return
            await session.delete(row)
            await session.commit()

    async def put_profile(self, user_id: str, profile: UserProfile):
        await self._ensure_schema()
        document = to_document(strip_absent(profile.model_dump()))
        async with self._sessions() as session:
            row = await session.get(UserProfileDocument, user_id)
            if row is None:
                row = UserProfileDocument(user_id=user_id)
                session.add(row)
            row.completed_at = profile.completed_at
            row.document = document
            await session.commit()

    async def get_profile(self, user_id: str) -> Optional[UserProfile]:
        await self._ensure_schema()
        async with self._sessions() as session:
            row = await session.get(UserProfileDocument, user_id)
        if row is None:
            return None
        return UserProfile.model_validate(row.document)

    async def dispose(self):
        await self._engine.dispose()
