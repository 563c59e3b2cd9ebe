"""
Mood kinds and their fixed lookup tables.
"""
from enum import Enum


class MoodType(str, Enum):
    """The five mood kinds, in their canonical order.

    The declaration order is significant: it breaks ties when picking the most
    common mood.
    """
    HAPPY = "happy"
    SAD = "sad"
    ANGRY = "angry"
    CALM = "calm"
    EXCITED = "excited"


MOOD_ORDER = tuple(MoodType)

# Score used for trend charts only; distribution counts ignore it.
MOOD_SCORES = {
    MoodType.ANGRY: 1,
    MoodType.SAD: 2,
    MoodType.CALM: 3,
    MoodType.HAPPY: 4,
    MoodType.EXCITED: 5,
}

MOOD_EMOJIS = {
    MoodType.HAPPY: "😊",
    MoodType.SAD: "😢",
    MoodType.ANGRY: "😠",
    MoodType.CALM: "😌",
    MoodType.EXCITED: "🎉",
}

# rich color names for the CLI
MOOD_COLORS = {
    MoodType.HAPPY: "yellow",
    MoodType.SAD: "blue",
    MoodType.ANGRY: "red",
    MoodType.CALM: "green",
    MoodType.EXCITED: "magenta",
}

MIN_MOOD_SCORE = 1
MAX_MOOD_SCORE = 5
