from datetime import datetime
from typing import Optional

from innerpeace.core.logger import logger
from innerpeace.llm.gemini_client import GeminiClient, get_oracle_client
from innerpeace.memory.record_store import RecordStore, get_record_store
from innerpeace.memory.schemas import JournalEntry, utcnow

ANONYMOUS_USER_ID = "anonymous"

def default_title(now: Optional[datetime] = None) -> str:
    # e.g. "Monday, Jan 5"
    now = now or datetime.now()
    return f"{now:%A, %b} {now.day}"

class JournalService:
    def __init__(self, store: Optional[RecordStore] = None, oracle: Optional[GeminiClient] = None):
        self.store = store or get_record_store()
        self.oracle = oracle or get_oracle_client()

    async def add_entry(
        self,
        user_id: str,
        content: str,
        title: str = "",
        prompt: Optional[str] = None,
    ) -> Optional[str]:
        content = (content or "").strip()
        if not content:
            logger.warning("Ignoring empty journal entry")
            return None

        logger.info("Adding journal entry...")

        # 1. Score sentiment (falls back locally, never raises)
        sentiment = await self.oracle.score_sentiment(content)

        # 2. Persist with sentiment attached
        entry = JournalEntry(
            user_id=user_id or ANONYMOUS_USER_ID,
            title=(title or "").strip() or default_title(),
            content=content,
            prompt=prompt or None,
            sentiment_score=sentiment.score,
            sentiment_label=sentiment.label,
            timestamp=utcnow(),
        )
        entry_id = await self.store.save_journal_entry(entry)

        logger.info("Journal entry added (ID: {}). Sentiment: {}", entry_id, sentiment.label)
        return entry_id

    async def edit_entry(self, entry_id: str, content: str, title: str = ""):
        content = (content or "").strip()
        if not content:
            logger.warning("Ignoring edit that would empty journal entry {}", entry_id)
            return

        sentiment = await self.oracle.score_sentiment(content)
        await self.store.update_journal_entry(entry_id, {
            "title": (title or "").strip() or default_title(),
            "content": content,
            "sentiment_score": sentiment.score,
            "sentiment_label": sentiment.label,
            "updated_at": utcnow(),
        })
        logger.info("Journal entry {} updated. Sentiment: {}", entry_id, sentiment.label)

    async def delete_entry(self, entry_id: str):
        await self.store.delete_journal_entry(entry_id)

    async def list_entries(self, user_id: str, limit: int = 50) -> list[JournalEntry]:
        return await self.store.get_journal_entries(user_id or ANONYMOUS_USER_ID, limit)
