"""
Statistics over a collection of mood entries.

Every function here is pure: the same entries and reference date always give
the same result, and no input order is assumed. Entries only need ``mood`` and
``timestamp`` attributes, so both ``MoodEntry`` records and rows adapted by an
entry store can be passed in.
"""
import math
from datetime import date, datetime, timedelta, tzinfo
from typing import Dict, Iterable, List, Optional

from moodflow.models.enums import MoodType, MOOD_ORDER, MOOD_SCORES
from moodflow.schemas.analytics import MoodStats, WeeklyBucket

WEEK_DAYS = 7
DEFAULT_MOOD = MoodType.HAPPY


def entry_day(timestamp: datetime, tz: Optional[tzinfo] = None) -> date:
    """Calendar day of ``timestamp``.

    Aware timestamps are converted to ``tz`` first when one is given; naive
    timestamps are taken as already local.
    """
    if tz is not None and timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(tz)
    return timestamp.date()


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_distribution(entries: Iterable) -> Dict[MoodType, int]:
    """Count entries per mood kind; all five kinds are always present."""
    counts = {mood: 0 for mood in MOOD_ORDER}
    for entry in entries:
        counts[MoodType(entry.mood)] += 1
    return counts


def compute_percentages(distribution: Dict[MoodType, int]) -> Dict[MoodType, int]:
    """Each kind's share of all entries as a whole percent, rounded half up.

    All five kinds are present; an empty distribution gives all zeros. The
    shares need not add up to exactly 100.
    """
    total = sum(distribution.get(mood, 0) for mood in MOOD_ORDER)
    if not total:
        return {mood: 0 for mood in MOOD_ORDER}
    # integer half-up of count * 100 / total
    return {
        mood: (distribution.get(mood, 0) * 200 + total) // (2 * total)
        for mood in MOOD_ORDER
    }


def compute_average_mood(distribution: Dict[MoodType, int]) -> MoodType:
    """The most frequent mood kind.

    Ties go to the kind declared first in ``MoodType``; an all-zero distribution
    yields ``DEFAULT_MOOD``.
    """
    best = DEFAULT_MOOD
    best_count = 0
    for mood in MOOD_ORDER:
        count = distribution.get(mood, 0)
        if count > best_count:
            best, best_count = mood, count
    return best


def compute_streak(entries: Iterable, today: date, tz: Optional[tzinfo] = None) -> int:
    """Consecutive days with at least one entry, counting back from ``today``.

    A day without entries ends the streak, so no entry today means 0.
    """
    days = sorted({entry_day(entry.timestamp, tz) for entry in entries}, reverse=True)

    streak = 0
    candidate = today
    for day in days:
        if day > candidate:
            # future-dated, or a day already counted
            continue
        if day != candidate:
            break
        streak += 1
        candidate -= timedelta(days=1)
    return streak


def compute_this_week(entries: Iterable, today: date, tz: Optional[tzinfo] = None) -> int:
    """Number of entries dated within ``[today - 6 days, today]``."""
    start = today - timedelta(days=WEEK_DAYS - 1)
    return sum(1 for entry in entries if start <= entry_day(entry.timestamp, tz) <= today)


def compute_weekly_trend(
    entries: Iterable,
    week_start: date,
    tz: Optional[tzinfo] = None,
) -> List[WeeklyBucket]:
    """Seven daily buckets starting at ``week_start``.

    Each bucket holds the rounded (half up) average score of that day's
    entries, or 0 when the day is empty. Buckets are labelled with the real
    weekday of their date, so a window starting on a Thursday reads Thu..Wed.
    """
    scores_by_day: Dict[date, List[int]] = {}
    for entry in entries:
        day = entry_day(entry.timestamp, tz)
        scores_by_day.setdefault(day, []).append(MOOD_SCORES[MoodType(entry.mood)])

    buckets = []
    for offset in range(WEEK_DAYS):
        day = week_start + timedelta(days=offset)
        scores = scores_by_day.get(day)
        score = round_half_up(sum(scores) / len(scores)) if scores else 0
        buckets.append(WeeklyBucket(day=day.strftime("%a"), date=day, score=score))
    return buckets


def compute_stats(entries: Iterable, today: date, tz: Optional[tzinfo] = None) -> MoodStats:
    """Full statistics snapshot for ``entries`` as seen on ``today``."""
    entries = list(entries)
    distribution = compute_distribution(entries)
    return MoodStats(
        total_entries=len(entries),
        mood_distribution=distribution,
        mood_percentages=compute_percentages(distribution),
        average_mood=compute_average_mood(distribution),
        streak_count=compute_streak(entries, today, tz),
        this_week=compute_this_week(entries, today, tz),
        weekly_data=compute_weekly_trend(entries, today - timedelta(days=WEEK_DAYS - 1), tz),
    )

