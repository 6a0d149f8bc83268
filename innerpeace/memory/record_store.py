"""
Record Store Adapter
====================

One stable API per record kind (mood entries, journal entries, chat
sessions, user profiles) over two interchangeable backends:

- the remote document store (`SqlDocumentStore`), and
- the in-process `LocalFallbackStore`.

The backend is picked per call: demo mode (evaluated from configuration
on every call, or from an injected predicate) routes straight to the
local store. Otherwise the remote store is tried under a fixed timeout;
any error or timeout is logged and the same operation is replayed on the
local store. No public operation raises because of the backend.

The two replicas are never reconciled. A record written to one side
during an outage stays invisible to the other; `StorageStateTracker`
logs every switch between them.
"""

from typing import Callable, Optional, Sequence

from pydantic import ValidationError

from innerpeace.config import Settings, get_settings, is_demo_mode
from innerpeace.core.exceptions import MissingIdentityError, StoreUnavailableError
from innerpeace.core.logger import logger
from innerpeace.core.state_manager import StorageState, StorageStateTracker
from innerpeace.core.timeouts import with_timeout
from innerpeace.insights.trends import analyze_mood_patterns
from innerpeace.memory.local_store import LocalFallbackStore
from innerpeace.memory.remote_store import SqlDocumentStore
from innerpeace.memory.schemas import (
    ChatSession,
    JournalEntry,
    Message,
    MoodEntry,
    MoodPatterns,
    UserProfile,
    utcnow,
)

COLLECTION_NAMES = {
    "mood": "moodEntries",
    "journal": "journalEntries",
    "chat": "chatSessions",
    "profile": "userProfiles",
}


class RecordStore:
    def __init__(
        self,
        remote=None,
        local: Optional[LocalFallbackStore] = None,
        demo_mode: Optional[Callable[[], bool]] = None,
        timeout: Optional[float] = None,
        tracker: Optional[StorageStateTracker] = None,
    ):
        self._remote = remote
        self._remote_injected = remote is not None
        self._remote_url: Optional[str] = None
        self.local = local or LocalFallbackStore()
        self._demo_mode = demo_mode or is_demo_mode
        self._timeout = timeout
        self.tracker = tracker or StorageStateTracker()

    # ------------------------------------------------------------------
    # Backend selection
    # ------------------------------------------------------------------

    async def _remote_store(self, current: Settings):
        if self._remote_injected:
            return self._remote
        url = current.DATABASE_URL.strip()
        if not url:
            raise StoreUnavailableError("DATABASE_URL is not set")
        if self._remote is None or self._remote_url != url:
            previous = self._remote
            self._remote = SqlDocumentStore(url)
            self._remote_url = url
            if previous is not None:
                await previous.dispose()
                logger.info("Disposed document store engine for previous DATABASE_URL")
            logger.info(
                "Connected to document store project: {}",
                current.STORE_PROJECT_ID or "(project id not set)"
            )
        return self._remote

    async def _remote_call(self, kind: str, context: str, call):
        current = get_settings()
        seconds = self._timeout if self._timeout is not None else current.STORE_TIMEOUT_SECONDS
        store = await self._remote_store(current)
        result = await with_timeout(call(store), seconds, context)
        self.tracker.record(kind, StorageState.REMOTE)
        return result

    def _use_local(self, kind: str):
        self.tracker.record(kind, StorageState.LOCAL)

    def _fall_back(self, kind: str, action: str, error: Exception):
        logger.error("Error during {} on {}: {!r}", action, COLLECTION_NAMES[kind], error)
        logger.info("Falling back to local storage")
        self.tracker.record_fallback(kind)

    # ------------------------------------------------------------------
    # Generic operations
    # ------------------------------------------------------------------

    async def _save(self, kind: str, record) -> str:
        if self._demo_mode():
            self._use_local(kind)
            stored = self.local.insert(kind, record)
            logger.debug("Saved {} to local storage (demo mode): {}", kind, stored.id)
            return stored.id

        try:
            record_id = await self._remote_call(
                kind, f"insert({COLLECTION_NAMES[kind]})", lambda store: store.insert(kind, record)
            )
            logger.info("{} saved to document store: {}", COLLECTION_NAMES[kind], record_id)
            return record_id
        except Exception as e:
            self._fall_back(kind, "insert", e)
            return self.local.insert(kind, record).id

    async def _recent(self, kind: str, user_id: str, limit: int) -> list:
        if self._demo_mode():
            self._use_local(kind)
            records = self.local.query(kind, user_id, limit)
            logger.debug("Retrieved {} {} from local storage (demo mode)", len(records), kind)
            return records

        try:
            records = await self._remote_call(
                kind, f"query({COLLECTION_NAMES[kind]})", lambda store: store.query(kind, user_id, limit)
            )
            logger.debug("Retrieved {} {} from document store", len(records), kind)
            return records
        except Exception as e:
            self._fall_back(kind, "query", e)
            return self.local.query(kind, user_id, limit)

    def _local_update(self, kind: str, record_id: str, fields: dict):
        try:
            self.local.update_by_id(kind, record_id, fields)
        except ValidationError as e:
            logger.error("Rejected local update of {} {}: {}", kind, record_id, e)

    async def _update(self, kind: str, record_id: str, fields: dict):
        if self._demo_mode():
            self._use_local(kind)
            self._local_update(kind, record_id, fields)
            return

        try:
            await self._remote_call(
                kind, f"update({COLLECTION_NAMES[kind]})",
                lambda store: store.update_by_id(kind, record_id, fields)
            )
        except Exception as e:
            self._fall_back(kind, "update", e)
            self._local_update(kind, record_id, fields)

    async def _delete(self, kind: str, record_id: str):
        if self._demo_mode():
            self._use_local(kind)
            self.local.delete_by_id(kind, record_id)
            return

        try:
            await self._remote_call(
                kind, f"delete({COLLECTION_NAMES[kind]})",
                lambda store: store.delete_by_id(kind, record_id)
            )
        except Exception as e:
            self._fall_back(kind, "delete", e)
            self.local.delete_by_id(kind, record_id)

    # ------------------------------------------------------------------
    # Mood entries
    # ------------------------------------------------------------------

    async def save_mood_entry(self, entry: MoodEntry) -> str:
        return await self._save("mood", entry)

    async def get_mood_entries(self, user_id: str, limit: Optional[int] = None) -> list[MoodEntry]:
        if limit is None:
            limit = get_settings().MOOD_HISTORY_LIMIT
        return await self._recent("mood", user_id, limit)

    async def get_mood_patterns(self, user_id: str, days: int = 30) -> MoodPatterns:
        entries = await self.get_mood_entries(user_id, days)
        return analyze_mood_patterns(entries)

    # ------------------------------------------------------------------
    # Journal entries
    # ------------------------------------------------------------------

    async def save_journal_entry(self, entry: JournalEntry) -> str:
        return await self._save("journal", entry)

    async def get_journal_entries(self, user_id: str, limit: Optional[int] = None) -> list[JournalEntry]:
        if limit is None:
            limit = get_settings().JOURNAL_HISTORY_LIMIT
        return await self._recent("journal", user_id, limit)

    async def update_journal_entry(self, entry_id: str, fields: dict):
        await self._update("journal", entry_id, fields)

    async def delete_journal_entry(self, entry_id: str):
        await self._delete("journal", entry_id)

    # ------------------------------------------------------------------
    # Chat sessions
    # ------------------------------------------------------------------

    async def save_chat_session(self, session: ChatSession) -> str:
        return await self._save("chat", session)

    async def update_chat_session(self, session_id: str, messages: Sequence[Message]):
        last_message_at = utcnow()
        if messages:
            last_message_at = max(last_message_at, max(m.timestamp for m in messages))
        await self._update("chat", session_id, {
            "messages": [m.model_dump() for m in messages],
            "last_message_at": last_message_at,
        })

    async def get_chat_sessions(self, user_id: str, limit: Optional[int] = None) -> list[ChatSession]:
        if limit is None:
            limit = get_settings().CHAT_HISTORY_LIMIT
        return await self._recent("chat", user_id, limit)

    # ------------------------------------------------------------------
    # User profiles
    # ------------------------------------------------------------------

    async def save_user_profile(self, user_id: str, profile: UserProfile):
        if not user_id:
            raise MissingIdentityError("Saving a profile requires a signed-in user")

        if self._demo_mode():
            self._use_local("profile")
            self.local.put_profile(user_id, profile)
            logger.debug("Saved user profile to local storage (demo mode)")
            return

        try:
            await self._remote_call(
                "profile", "put(userProfiles)", lambda store: store.put_profile(user_id, profile)
            )
            logger.info("User profile saved for {}", user_id)
        except Exception as e:
            self._fall_back("profile", "put", e)
            self.local.put_profile(user_id, profile)

    async def get_user_profile(self, user_id: str) -> Optional[UserProfile]:
        if not user_id:
            raise MissingIdentityError("Reading a profile requires a signed-in user")

        if self._demo_mode():
            self._use_local("profile")
            return self.local.get_profile(user_id)

        try:
            profile = await self._remote_call(
                "profile", "get(userProfiles)", lambda store: store.get_profile(user_id)
            )
            if profile is None:
                logger.debug("No user profile found for {}", user_id)
            return profile
        except Exception as e:
            self._fall_back("profile", "get", e)
            return self.local.get_profile(user_id)


# Singleton
_record_store = None

def get_record_store() -> RecordStore:
    global _record_store
    if _record_store is None:
        _record_store = RecordStore()
    return _record_store
