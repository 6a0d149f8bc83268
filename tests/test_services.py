"""Feature services built on the store and the oracle."""

import pytest
from pydantic import ValidationError

from innerpeace.agent.orchestrator import CompanionOrchestrator
from innerpeace.core.exceptions import MissingIdentityError
from innerpeace.journal.journal_service import JournalService, default_title
from innerpeace.llm.fallbacks import ANXIETY_RESPONSE, DBT_TIPP_SKILL, GREETING_RESPONSE
from innerpeace.llm.gemini_client import GeminiClient
from innerpeace.memory.record_store import RecordStore
from innerpeace.memory.schemas import UserProfile
from innerpeace.mood.mood_service import MoodService

from conftest import BASE_TIME, run


# ==================== Mood ====================


@pytest.mark.parametrize("mood", [0, 6, -1])
def test_mood_out_of_range_is_rejected(demo_store, mood):
    service = MoodService(demo_store)
    with pytest.raises(ValidationError):
        run(service.log_mood("u1", mood))
    assert demo_store.local.count("mood") == 0


def test_log_mood_fills_label_and_blank_note(demo_store):
    service = MoodService(demo_store)

    async def scenario():
        await service.log_mood("u1", 4, ["Calm"], note="   ")
        return await service.recent("u1", 5)

    [entry] = run(scenario())
    assert entry.mood_label == "Good"
    assert entry.note is None
    assert 1 <= entry.mood <= 5


def test_log_mood_requires_identity(demo_store):
    with pytest.raises(MissingIdentityError):
        run(MoodService(demo_store).log_mood("", 3))


def test_mood_insight_text(demo_store):
    service = MoodService(demo_store)

    async def scenario():
        for day, mood in enumerate([2, 2, 2, 5, 5, 5, 5]):
            await service.log_mood("u1", mood, ["Hopeful"], timestamp=BASE_TIME.replace(day=day + 1))
        return await service.patterns("u1", 7), await service.insight("u1", 7)

    patterns, text = run(scenario())
    assert patterns.mood_trend == "improving"
    assert patterns.average_mood == pytest.approx(3.71, abs=0.01)
    assert "improving" in text


# ==================== Journal ====================


def test_journal_save_with_fallback_sentiment(demo_store):
    service = JournalService(demo_store, GeminiClient())

    async def scenario():
        entry_id = await service.add_entry("u1", "I feel really happy and grateful today")
        return entry_id, await service.list_entries("u1")

    entry_id, [entry] = run(scenario())
    assert entry_id
    assert entry.id == entry_id
    assert entry.sentiment_label in ("Positive", "Very Positive")
    assert entry.title == default_title(entry.timestamp.astimezone())


def test_journal_blank_content_is_not_saved(demo_store):
    service = JournalService(demo_store, GeminiClient())
    assert run(service.add_entry("u1", "   ")) is None
    assert demo_store.local.count("journal") == 0


def test_journal_keeps_title_and_prompt(demo_store):
    service = JournalService(demo_store, GeminiClient())

    async def scenario():
        await service.add_entry("u1", "A quiet walk", title=" Sunday ", prompt="What made you smile recently?")
        return await service.list_entries("u1")

    [entry] = run(scenario())
    assert entry.title == "Sunday"
    assert entry.prompt == "What made you smile recently?"


def test_journal_anonymous_owner(demo_store):
    service = JournalService(demo_store, GeminiClient())

    async def scenario():
        await service.add_entry("", "Just thinking")
        return await service.list_entries("")

    [entry] = run(scenario())
    assert entry.user_id == "anonymous"


def test_journal_edit_reruns_sentiment(demo_store):
    service = JournalService(demo_store, GeminiClient())

    async def scenario():
        entry_id = await service.add_entry("u1", "Today was wonderful")
        await service.edit_entry(entry_id, "Actually I am sad and hurt", title="Later")
        return await service.list_entries("u1")

    [entry] = run(scenario())
    assert entry.title == "Later"
    assert entry.sentiment_label == "Very Negative"
    assert entry.sentiment_score == pytest.approx(-0.8)
    assert entry.updated_at is not None


def test_journal_delete(demo_store):
    service = JournalService(demo_store, GeminiClient())

    async def scenario():
        entry_id = await service.add_entry("u1", "Delete me")
        await service.delete_entry(entry_id)
        await service.delete_entry(entry_id)
        return await service.list_entries("u1")

    assert run(scenario()) == []


def test_default_title_format():
    assert default_title(BASE_TIME) == "Saturday, Mar 1"


# ==================== Chat ====================


class ScriptedOracle(GeminiClient):
    def __init__(self):
        self.chat_calls = []

    async def complete_chat(self, message, history=(), profile=None):
        self.chat_calls.append({"message": message, "history": list(history), "profile": profile})
        return f"echo: {message}"


def test_chat_requires_identity(demo_store):
    orchestrator = CompanionOrchestrator(demo_store, GeminiClient())
    with pytest.raises(MissingIdentityError):
        run(orchestrator.send_message("", "hello"))


def test_chat_transcript_is_persisted(demo_store):
    oracle = ScriptedOracle()
    orchestrator = CompanionOrchestrator(demo_store, oracle)

    async def scenario():
        await demo_store.save_user_profile("u1", UserProfile(occupation="student"))
        await orchestrator.send_message("u1", "first")
        await orchestrator.send_message("u1", "second")
        return await demo_store.get_chat_sessions("u1")

    [session] = run(scenario())
    assert session.id == orchestrator.session_id
    assert [m.role for m in session.messages] == ["user", "assistant", "user", "assistant"]
    assert session.messages[-1].content == "echo: second"
    assert session.last_message_at >= session.messages[-1].timestamp
    assert oracle.chat_calls[1]["history"] == [
        {"role": "user", "content": "first"},
        {"role": "assistant", "content": "echo: first"},
    ]
    assert oracle.chat_calls[0]["profile"].occupation == "student"


def test_chat_falls_back_offline(demo_store):
    orchestrator = CompanionOrchestrator(demo_store, GeminiClient())

    async def scenario():
        greeting = await orchestrator.send_message("u1", "hello")
        anxious = await orchestrator.send_message("u1", "I'm anxious about exams")
        return greeting, anxious

    greeting, anxious = run(scenario())
    assert greeting.content == GREETING_RESPONSE
    assert anxious.content == ANXIETY_RESPONSE


def test_chat_dbt_exercise(demo_store):
    orchestrator = CompanionOrchestrator(demo_store, GeminiClient())
    reply = run(orchestrator.send_message("u1", "I'm panicking", exercise="dbt"))
    assert reply.content == DBT_TIPP_SKILL
    assert reply.exercise_type == "DBT"


def test_chat_new_user_starts_new_session(demo_store):
    orchestrator = CompanionOrchestrator(demo_store, ScriptedOracle())

    async def scenario():
        await orchestrator.send_message("u1", "one")
        first_session = orchestrator.session_id
        await orchestrator.send_message("u2", "two")
        return first_session, orchestrator.session_id

    first_session, second_session = run(scenario())
    assert first_session != second_session
    assert len(run(demo_store.get_chat_sessions("u2"))) == 1


def test_chat_blank_message_is_ignored(demo_store):
    orchestrator = CompanionOrchestrator(demo_store, ScriptedOracle())
    assert run(orchestrator.send_message("u1", "  ")) is None
    assert orchestrator.session_id is None
