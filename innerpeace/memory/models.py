from datetime import datetime
from sqlalchemy import Column, String, DateTime, JSON
from sqlalchemy.orm import declarative_base

Base = declarative_base()

class DocumentMixin:
    """One document per row: routing columns plus a JSON body."""

    id = Column(String(64), primary_key=True, index=True)
    user_id = Column(String(128), nullable=False, index=True)
    timestamp = Column(DateTime(timezone=True), nullable=False, index=True, default=datetime.utcnow)
    document = Column(JSON, nullable=False, default=dict)

class MoodEntryDocument(DocumentMixin, Base):
    __tablename__ = "mood_entries"

class JournalEntryDocument(DocumentMixin, Base):
    __tablename__ = "journal_entries"

class ChatSessionDocument(DocumentMixin, Base):
    # `timestamp` mirrors the session's last_message_at
    __tablename__ = "chat_sessions"

class UserProfileDocument(Base):
    __tablename__ = "user_profiles"

    user_id = Column(String(128), primary_key=True, index=True)
    completed_at = Column(DateTime(timezone=True), default=datetime.utcnow)
    document = Column(JSON, nullable=False, default=dict)

COLLECTIONS = {
    "mood": MoodEntryDocument,
    "journal": JournalEntryDocument,
    "chat": ChatSessionDocument,
}
