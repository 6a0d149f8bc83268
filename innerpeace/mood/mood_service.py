from datetime import datetime
from typing import Iterable, Optional

from innerpeace.core.exceptions import MissingIdentityError
from innerpeace.core.logger import logger
from innerpeace.insights.trends import describe_patterns
from innerpeace.memory.record_store import RecordStore, get_record_store
from innerpeace.memory.schemas import MOOD_LABELS, MoodEntry, MoodPatterns, utcnow

class MoodService:
    def __init__(self, store: Optional[RecordStore] = None):
        self.store = store or get_record_store()

    async def log_mood(
        self,
        user_id: str,
        mood: int,
        emotions: Iterable[str] = (),
        note: Optional[str] = None,
        timestamp: Optional[datetime] = None,
    ) -> str:
        if not user_id:
            raise MissingIdentityError("Logging a mood requires a signed-in user")

        entry = MoodEntry(
            user_id=user_id,
            mood=mood,
            mood_label=MOOD_LABELS.get(mood, ""),
            emotions=list(emotions),
            note=(note or "").strip() or None,
            timestamp=timestamp or utcnow(),
        )
        entry_id = await self.store.save_mood_entry(entry)
        logger.info("Mood {} ({}) logged for {}: {}", entry.mood, entry.mood_label, user_id, entry_id)
        return entry_id

    async def recent(self, user_id: str, limit: int = 30) -> list[MoodEntry]:
        return await self.store.get_mood_entries(user_id, limit)

    async def patterns(self, user_id: str, days: int = 30) -> MoodPatterns:
        return await self.store.get_mood_patterns(user_id, days)

    async def insight(self, user_id: str, days: int = 7) -> str:
        return describe_patterns(await self.patterns(user_id, days))
