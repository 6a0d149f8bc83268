"""
Record schemas for the InnerPeace companion.

Each persisted model maps onto one document collection:
- MoodEntry    -> "moodEntries"
- JournalEntry -> "journalEntries"
- ChatSession  -> "chatSessions" (embeds Message)
- UserProfile  -> "userProfiles" (keyed by user id)

Timestamps are client-clock datetimes and are the only ordering key.
"""

from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

MoodTrend = Literal["improving", "stable", "declining"]
Role = Literal["user", "assistant"]
SentimentLabel = Literal["Very Negative", "Negative", "Neutral", "Positive", "Very Positive"]

SENTIMENT_LABELS = ("Very Negative", "Negative", "Neutral", "Positive", "Very Positive")

MOOD_LABELS = {
    1: "Terrible",
    2: "Bad",
    3: "Okay",
    4: "Good",
    5: "Great",
}

EMOTIONS = [
    "Happy", "Calm", "Grateful", "Hopeful", "Energetic",
    "Anxious", "Sad", "Stressed", "Angry", "Tired",
    "Confused", "Lonely", "Overwhelmed", "Peaceful", "Motivated",
]

JOURNAL_PROMPTS = [
    "What are you grateful for today?",
    "What's on your mind right now?",
    "What's one small win you had today?",
    "How are you taking care of yourself?",
    "What challenge are you facing?",
    "What made you smile recently?",
]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes and drops offsets; everything in the core is UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Record(BaseModel):
    id: Optional[str] = None
    user_id: str = Field(..., min_length=1)

    @field_validator("*", mode="after")
    @classmethod
    def _aware_datetimes(cls, value):
        if isinstance(value, datetime):
            return as_aware(value)
        return value


class MoodEntry(Record):
    mood: int = Field(..., ge=1, le=5, description="1 = most negative, 5 = most positive")
    mood_label: str = ""
    emotions: List[str] = Field(default_factory=list)
    note: Optional[str] = None
    timestamp: datetime = Field(default_factory=utcnow)


class JournalEntry(Record):
    title: str
    content: str = Field(..., min_length=1)
    timestamp: datetime = Field(default_factory=utcnow)
    sentiment_score: float = Field(..., ge=-1, le=1)
    sentiment_label: SentimentLabel
    prompt: Optional[str] = None
    updated_at: Optional[datetime] = None


class Message(BaseModel):
    id: str
    role: Role
    content: str
    timestamp: datetime = Field(default_factory=utcnow)
    exercise_type: Optional[Literal["CBT", "DBT", "general"]] = None

    @field_validator("timestamp", mode="after")
    @classmethod
    def _aware_timestamp(cls, value: datetime) -> datetime:
        return as_aware(value)


class ChatSession(Record):
    messages: List[Message] = Field(default_factory=list)
    started_at: datetime = Field(default_factory=utcnow)
    last_message_at: datetime = Field(default_factory=utcnow)


class UserProfile(BaseModel):
    age: Optional[int] = Field(None, ge=13, le=120)
    gender: Optional[str] = None
    relationship_status: Optional[str] = None
    occupation: Optional[str] = None
    current_mood: Optional[str] = None
    medical_history: Optional[str] = None
    physical_activities: List[str] = Field(default_factory=list)
    mental_activities: List[str] = Field(default_factory=list)
    completed_at: datetime = Field(default_factory=utcnow)

    @field_validator("completed_at", mode="after")
    @classmethod
    def _aware_completed_at(cls, value: datetime) -> datetime:
        return as_aware(value)


class SentimentAnalysis(BaseModel):
    score: float = Field(..., ge=-1, le=1)
    label: SentimentLabel
    insights: List[str] = Field(default_factory=list)


class MoodPatterns(BaseModel):
    average_mood: float = 0
    mood_trend: MoodTrend = "stable"
    common_emotions: List[str] = Field(default_factory=list)
    entries_count: int = 0


RECORD_TYPES = {
    "mood": MoodEntry,
    "journal": JournalEntry,
    "chat": ChatSession,
}

# Field each collection is ordered by, newest first.
ORDER_FIELDS = {
    "mood": "timestamp",
    "journal": "timestamp",
    "chat": "last_message_at",
}
