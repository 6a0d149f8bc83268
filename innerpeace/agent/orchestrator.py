from typing import Optional
from uuid import uuid4

from innerpeace.core.exceptions import MissingIdentityError
from innerpeace.core.logger import logger
from innerpeace.llm.gemini_client import GeminiClient, get_oracle_client
from innerpeace.memory.record_store import RecordStore, get_record_store
from innerpeace.memory.schemas import ChatSession, Message, utcnow

EXERCISE_TYPES = {"cbt": "CBT", "dbt": "DBT"}

class CompanionOrchestrator:
    """Runs one chat conversation: oracle round-trip plus transcript persistence."""

    def __init__(self, store: Optional[RecordStore] = None, oracle: Optional[GeminiClient] = None):
        self.store = store or get_record_store()
        self.oracle = oracle or get_oracle_client()
        self.user_id: Optional[str] = None
        self.session_id: Optional[str] = None
        self.messages: list[Message] = []
        self.started_at = None

    def reset(self):
        self.user_id = None
        self.session_id = None
        self.messages = []
        self.started_at = None

    def resume(self, session: ChatSession):
        self.user_id = session.user_id
        self.session_id = session.id
        self.messages = list(session.messages)
        self.started_at = session.started_at
        logger.info("Resumed chat session {} ({} messages)", session.id, len(session.messages))

    async def send_message(self, user_id: str, text: str, exercise: Optional[str] = None) -> Optional[Message]:
        if not user_id:
            raise MissingIdentityError("Chat requires a signed-in user")

        text = (text or "").strip()
        if not text:
            return None

        if self.user_id != user_id:
            if self.user_id is not None:
                logger.info("User changed; starting a new conversation")
            self.reset()
            self.user_id = user_id

        history = [{"role": m.role, "content": m.content} for m in self.messages]
        self.messages.append(Message(id=str(uuid4()), role="user", content=text, timestamp=utcnow()))

        exercise = (exercise or "").lower()
        if exercise == "cbt":
            reply = await self.oracle.generate_cbt_exercise(text)
        elif exercise == "dbt":
            reply = await self.oracle.generate_dbt_skill(text)
        else:
            profile = await self.store.get_user_profile(user_id)
            reply = await self.oracle.complete_chat(text, history, profile)

        assistant = Message(
            id=str(uuid4()),
            role="assistant",
            content=reply,
            timestamp=utcnow(),
            exercise_type=EXERCISE_TYPES.get(exercise),
        )
        self.messages.append(assistant)
        await self._persist()
        return assistant

    async def _persist(self):
        if self.session_id is None:
            self.started_at = self.started_at or self.messages[0].timestamp
            session = ChatSession(
                user_id=self.user_id,
                messages=self.messages,
                started_at=self.started_at,
                last_message_at=self.messages[-1].timestamp,
            )
            self.session_id = await self.store.save_chat_session(session)
            logger.info("Chat session started: {}", self.session_id)
        else:
            await self.store.update_chat_session(self.session_id, self.messages)
