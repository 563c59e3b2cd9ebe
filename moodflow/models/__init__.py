from .mood import Mood
from .user import User

__all__ = ["Mood", "User"]
