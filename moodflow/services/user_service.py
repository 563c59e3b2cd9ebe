"""
User service for handling accounts and profiles.
"""
import uuid
from typing import List, Optional, Union

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select, func, or_

from moodflow.core.config import settings
from moodflow.core.exceptions import (
    UserNotFoundError,
    UserAlreadyExistsError,
    InvalidCredentialsError,
    UnauthorizedError,
    WeakPasswordError,
)
from moodflow.core.logging_config import log_error, log_warning, log_info
from moodflow.core.security import check_password, hash_password
from moodflow.core.time_utils import utc_now
from moodflow.models.mood import Mood
from moodflow.models.user import User
from moodflow.schemas.user import UserCreate, UserProfileResponse, UserSummary, UserUpdate

# Hash evaluated once to keep timing consistent for missing users
_DUMMY_PASSWORD_HASH = hash_password("moodflow-dummy-password")


class UserService:
    """User service class."""

    def __init__(self, session: Session):
        self.session = session

    def get_user_by_id(self, user_id: Union[str, uuid.UUID]) -> Optional[User]:
        """Get user by ID."""
        try:
            user_uuid = user_id if isinstance(user_id, uuid.UUID) else uuid.UUID(user_id)
        except ValueError:
            return None
        return self.session.get(User, user_uuid)

    def get_user_by_username(self, username: str) -> Optional[User]:
        statement = select(User).where(User.username == username)
        return self.session.exec(statement).first()

    def _find_conflict(self, username: str, email: str, exclude_id: Optional[uuid.UUID] = None) -> Optional[User]:
        statement = select(User).where(or_(User.username == username, User.email == email))
        if exclude_id is not None:
            statement = statement.where(User.id != exclude_id)
        return self.session.exec(statement).first()

    def create_user(self, user_data: UserCreate) -> User:
        """Register a new user."""
        if len(user_data.password) < settings.min_password_length:
            raise WeakPasswordError(
                f"Password must be at least {settings.min_password_length} characters long"
            )

        if self._find_conflict(user_data.username, user_data.email):
            raise UserAlreadyExistsError("Username or email already exists")

        user = User(
            username=user_data.username,
            email=user_data.email,
            password_hash=hash_password(user_data.password),
        )

        self.session.add(user)
        try:
            self.session.commit()
            self.session.refresh(user)
        except IntegrityError as exc:
            self.session.rollback()
            raise UserAlreadyExistsError("Username or email already exists") from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            log_error(exc, user_email=user.email)
            raise

        log_info(f"User registered: {user.username}")
        return user

    def authenticate_user(self, username: str, password: str) -> User:
        """Authenticate user with username and password."""
        user = self.get_user_by_username(username)
        if not user:
            # Perform dummy verify to keep timing consistent
            check_password(password, _DUMMY_PASSWORD_HASH)
            raise InvalidCredentialsError("Invalid credentials")

        if not check_password(password, user.password_hash):
            log_warning(f"Failed login for {username}")
            raise InvalidCredentialsError("Invalid credentials")

        if not user.is_active:
            raise UnauthorizedError("User account is inactive")

        return user

    def update_user(self, user_id: uuid.UUID, user_data: UserUpdate) -> User:
        """Update username and email."""
        user = self.get_user_by_id(user_id)
        if not user:
            raise UserNotFoundError("User not found")

        if self._find_conflict(user_data.username, user_data.email, exclude_id=user.id):
            raise UserAlreadyExistsError("Username or email already exists")

        user.username = user_data.username
        user.email = user_data.email
        user.updated_at = utc_now()

        try:
            self.session.add(user)
            self.session.commit()
            self.session.refresh(user)
        except IntegrityError as exc:
            self.session.rollback()
            raise UserAlreadyExistsError("Username or email already exists") from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            log_error(exc, user_email=user.email)
            raise

        return user

    def get_user_profile(self, user_id: uuid.UUID) -> UserProfileResponse:
        """Profile with mood count and average mood score."""
        user = self.get_user_by_id(user_id)
        if not user:
            raise UserNotFoundError("User not found")

        total, average = self.session.exec(
            select(func.count(Mood.id), func.avg(Mood.mood_score)).where(Mood.user_id == user.id)
        ).one()

        return UserProfileResponse(
            id=user.id,
            username=user.username,
            email=user.email,
            created_at=user.created_at,
            total_moods=total or 0,
            avg_mood_score=round(float(average), 2) if average is not None else 0.0,
        )

    def list_users(self) -> List[UserSummary]:
        """All users with their mood counts, newest first."""
        rows = self.session.exec(
            select(User, func.count(Mood.id).label("total_moods"))
            .outerjoin(Mood, Mood.user_id == User.id)
            .group_by(User.id)
            .order_by(User.created_at.desc())
        ).all()

        return [
            UserSummary(
                id=user.id,
                username=user.username,
                email=user.email,
                created_at=user.created_at,
                total_moods=total_moods,
            )
            for user, total_moods in rows
        ]
