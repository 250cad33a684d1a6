from sqlalchemy.orm import Session
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import List
import logging

from billing.models.user import User
from billing.schemas.user import UserCreate, UserLogin
from billing.utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)


class UserExistsError(Exception):
    """Exception raised when the username or email is already registered."""
    pass


class UserNotFoundError(Exception):
    """Exception raised when no user has the given username."""
    pass


class InvalidCredentialsError(Exception):
    """Exception raised when the password does not match."""
    pass


class UserService:
    """
    Service class for user registration and credential checks.

    No session or token is issued on login; it is a stateless check.
    """

    def __init__(self, db: Session):
        self.db = db

    def signup(self, user_data: UserCreate) -> User:
        """
        Register a new user.

        Uniqueness of username and email is checked before the insert. The
        unique constraints on both columns catch the case where a concurrent
        signup lands between the check and the write.

        Raises:
            UserExistsError: If a user already has this username or email
        """
        existing = (
            self.db.query(User)
            .filter(or_(User.username == user_data.username, User.email == user_data.email))
            .first()
        )
        if existing:
            raise UserExistsError("User already exists")

        user = User(
            username=user_data.username,
            email=user_data.email,
            password_hash=hash_password(user_data.password),
            phone=user_data.phone,
        )

        try:
            self.db.add(user)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise UserExistsError("User already exists")
        except SQLAlchemyError:
            self.db.rollback()
            raise

        self.db.refresh(user)
        logger.info(f"User '{user.username}' signed up")
        return user

    def login(self, credentials: UserLogin) -> User:
        """
        Check a username and password.

        Raises:
            UserNotFoundError: If the username is unknown
            InvalidCredentialsError: If the password does not match
        """
        user = self.db.query(User).filter(User.username == credentials.username).first()

        if not user:
            raise UserNotFoundError("User not found")

        if not verify_password(credentials.password, user.password_hash):
            raise InvalidCredentialsError("Invalid credentials")

        return user

    def get_all(self) -> List[User]:
        """Get every registered user."""
        return self.db.query(User).all()
