"""
Mood trend analysis over a bounded window of check-ins.

The window arrives newest-first (the order `get_mood_entries` returns),
so the first half is the recent half and the second half the older one.
Everything here is a pure function of its input.
"""

from collections import Counter
from typing import Sequence

from innerpeace.memory.schemas import MoodEntry, MoodPatterns

# Absolute shift on the 1..5 scale needed to call a trend. Fixed tuning
# constant, not derived from the window's variance.
TREND_THRESHOLD = 0.3
TOP_EMOTIONS = 5


def _mean(values: Sequence[int], default: float) -> float:
    if not values:
        return default
    return sum(values) / len(values)


def classify_trend(recent_mean: float, older_mean: float) -> str:
    delta = recent_mean - older_mean
    if delta > TREND_THRESHOLD:
        return "improving"
    if -delta > TREND_THRESHOLD:
        return "declining"
    return "stable"


def rank_emotions(entries: Sequence[MoodEntry], top: int = TOP_EMOTIONS) -> list[str]:
    """Most frequent tags first; ties keep first-encountered order."""
    counts = Counter(tag for entry in entries for tag in entry.emotions)
    return [tag for tag, _ in counts.most_common(top)]


def analyze_mood_patterns(entries: Sequence[MoodEntry]) -> MoodPatterns:
    if not entries:
        return MoodPatterns(average_mood=0, mood_trend="stable", common_emotions=[], entries_count=0)

    moods = [entry.mood for entry in entries]
    average = sum(moods) / len(moods)

    mid = len(moods) // 2
    recent_mean = _mean(moods[:mid], average)
    older_mean = _mean(moods[mid:], average)

    return MoodPatterns(
        average_mood=average,
        mood_trend=classify_trend(recent_mean, older_mean),
        common_emotions=rank_emotions(entries),
        entries_count=len(entries),
    )


def describe_patterns(patterns: MoodPatterns) -> str:
    if patterns.entries_count == 0:
        return "Log your first mood to start seeing patterns."

    lines = [
        f"Average mood {patterns.average_mood:.1f}/5 across {patterns.entries_count} check-ins.",
    ]
    if patterns.mood_trend == "improving":
        lines.append("Your mood has been improving lately. Keep doing what helps.")
    elif patterns.mood_trend == "declining":
        lines.append("Your mood has dipped recently. Be gentle with yourself.")
    else:
        lines.append("Your mood has been steady.")
    if patterns.common_emotions:
        lines.append("You often feel: " + ", ".join(patterns.common_emotions) + ".")
    return " ".join(lines)
