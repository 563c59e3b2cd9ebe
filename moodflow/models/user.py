"""
User account model.
"""
from typing import List, TYPE_CHECKING

from sqlmodel import Field, Relationship

from .base import BaseModel

if TYPE_CHECKING:
    from .mood import Mood


class User(BaseModel, table=True):
    """A journal owner with hashed credentials."""
    __tablename__ = "users"

    username: str = Field(..., unique=True, index=True, min_length=1, max_length=100)
    email: str = Field(..., unique=True, index=True, max_length=255)
    password_hash: str = Field(..., max_length=255)
    is_active: bool = Field(default=True)

    moods: List["Mood"] = Relationship(
        back_populates="user",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )
