"""Trend analysis over newest-first mood windows."""

import pytest

from innerpeace.insights.trends import (
    TREND_THRESHOLD,
    analyze_mood_patterns,
    classify_trend,
    describe_patterns,
    rank_emotions,
)
from innerpeace.memory.schemas import MoodPatterns

from conftest import make_mood


def window(moods, emotions=None):
    """Build a newest-first window from a list of moods."""
    emotions = emotions or [[] for _ in moods]
    return [
        make_mood(mood=m, emotions=e, days_ago=i)
        for i, (m, e) in enumerate(zip(moods, emotions))
    ]


def test_recent_half_higher_is_improving():
    patterns = analyze_mood_patterns(window([5, 5, 1, 1]))
    assert patterns.average_mood == pytest.approx(3.0)
    assert patterns.mood_trend == "improving"
    assert patterns.entries_count == 4


def test_recent_half_lower_is_declining():
    assert analyze_mood_patterns(window([1, 1, 5, 5])).mood_trend == "declining"


def test_flat_window_is_stable():
    assert analyze_mood_patterns(window([3, 3, 3, 3])).mood_trend == "stable"


def test_empty_window():
    patterns = analyze_mood_patterns([])
    assert patterns == MoodPatterns(average_mood=0, mood_trend="stable", common_emotions=[], entries_count=0)


def test_single_entry_uses_overall_average_for_empty_half():
    patterns = analyze_mood_patterns(window([4]))
    assert patterns.average_mood == 4
    assert patterns.mood_trend == "stable"


def test_threshold_is_strict():
    assert classify_trend(3.3, 3.0) == "stable"
    assert classify_trend(3.0 + TREND_THRESHOLD + 0.01, 3.0) == "improving"
    assert classify_trend(3.0, 3.0 + TREND_THRESHOLD + 0.01) == "declining"


def test_common_emotions_ranked_by_count():
    entries = window([3, 3, 3, 3], [["a", "b"], ["a"], ["a", "c"], ["b"]])
    assert analyze_mood_patterns(entries).common_emotions == ["a", "b", "c"]


def test_emotion_ties_keep_first_seen_order():
    entries = window([3, 3], [["calm", "tired"], ["sad", "tired", "happy"]])
    assert rank_emotions(entries) == ["tired", "calm", "sad", "happy"]


def test_common_emotions_capped_at_five():
    entries = window([3], [["a", "b", "c", "d", "e", "f", "g"]])
    assert len(analyze_mood_patterns(entries).common_emotions) == 5


def test_week_of_recovery():
    # Logged oldest -> newest as 2,2,2,5,5,5,5; the query hands them back newest-first.
    patterns = analyze_mood_patterns(window([5, 5, 5, 5, 2, 2, 2]))
    assert patterns.average_mood == pytest.approx(3.714, abs=0.01)
    assert patterns.mood_trend == "improving"


def test_describe_patterns_mentions_trend_and_emotions():
    text = describe_patterns(MoodPatterns(
        average_mood=3.5, mood_trend="declining", common_emotions=["Tired"], entries_count=4
    ))
    assert "dipped" in text
    assert "Tired" in text
    assert "3.5" in text


def test_describe_patterns_empty():
    assert "first mood" in describe_patterns(MoodPatterns())
