"""User management utilities.

This module provides user management functionality including user storage,
password hashing, student signup, admin bootstrap, and credential checks.
"""

import logging
from typing import Optional

import bcrypt
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from config import ROLE_ADMIN, ROLE_STUDENT, ROLES
from core.exceptions import UserAlreadyExistsError, ValidationError
from schemas.user import User
from models.user import UserModel
from utils.converters import user_to_model, model_to_user

logger = logging.getLogger(__name__)

# Default bcrypt cost factor for new password hashes
BCRYPT_ROUNDS = 12


def _truncate(password_bytes: bytes) -> bytes:
    # bcrypt only looks at the first 72 bytes
    return password_bytes[:72]


class UserManager:
    """Manages user data persistence and operations using SQLAlchemy."""

    def __init__(self, db: Session, bcrypt_rounds: int = BCRYPT_ROUNDS):
        """Initialize UserManager.

        Args:
            db: SQLAlchemy Session.
            bcrypt_rounds: Cost factor used when hashing new passwords.
        """
        self.db = db
        self.bcrypt_rounds = bcrypt_rounds

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password.

        Returns:
            Hashed password (bcrypt hash string).
        """
        password_bytes = password.encode("utf-8")
        if len(password_bytes) > 72:
            logger.warning(
                "Password exceeds 72 bytes (%d bytes), truncating", len(password_bytes)
            )
        salt = bcrypt.gensalt(rounds=self.bcrypt_rounds)
        hashed = bcrypt.hashpw(_truncate(password_bytes), salt)
        return hashed.decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against a bcrypt hash.

        Args:
            plain_password: Plain text password to verify.
            hashed_password: Bcrypt hash string to verify against.

        Returns:
            True if password matches, False otherwise.
        """
        try:
            return bcrypt.checkpw(
                _truncate(plain_password.encode("utf-8")),
                hashed_password.encode("utf-8"),
            )
        except ValueError as e:
            logger.error("Password verification error: %s", e)
            return False

    def create_user(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        role: str,
        student_id: Optional[str] = None,
    ) -> User:
        """Create a new user.

        Args:
            email: Login email; stored lower-cased.
            password: Plain text password.
            first_name: Given name.
            last_name: Family name.
            role: User role ('student' or 'admin').
            student_id: Registrar student number (students only).

        Returns:
            Created User object.

        Raises:
            UserAlreadyExistsError: If the email or student ID is taken.
            ValidationError: If the role is unknown.
        """
        if role not in ROLES:
            raise ValidationError(f"Invalid role: {role}")
        email = email.strip().lower()
        if self.get_user_by_email(email):
            raise UserAlreadyExistsError("Email already registered")
        if student_id and self.get_user_by_student_id(student_id):
            raise UserAlreadyExistsError("Student ID already registered")

        user = User(
            email=email,
            student_id=student_id,
            first_name=first_name,
            last_name=last_name,
            role=role,
            password_hash=self.hash_password(password),
        )

        # Two concurrent signups can both pass the checks above; the unique
        # constraints catch the loser.
        try:
            model = user_to_model(user)
            self.db.add(model)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if "student_id" in str(e).lower():
                raise UserAlreadyExistsError("Student ID already registered") from e
            raise UserAlreadyExistsError("Email already registered") from e

        logger.info("Created %s user: %s", role, email)
        return user

    def signup_student(
        self,
        email: Optional[str],
        student_id: Optional[str],
        first_name: Optional[str],
        last_name: Optional[str],
        password: Optional[str],
    ) -> User:
        """Register a new student account.

        Raises:
            ValidationError: If any field is missing.
            UserAlreadyExistsError: If the email or student ID is taken.
        """
        if not all([email, student_id, first_name, last_name, password]):
            raise ValidationError("All fields are required")
        return self.create_user(
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            role=ROLE_STUDENT,
            student_id=student_id,
        )

    def ensure_admin(
        self,
        email: str,
        password: str,
        first_name: str = "Admin",
        last_name: str = "User",
    ) -> User:
        """Create an admin account unless one already exists with this email.

        Returns:
            The existing or newly created admin.

        Raises:
            UserAlreadyExistsError: If the email belongs to a non-admin account.
        """
        existing = self.get_user_by_email(email)
        if existing:
            if existing.role != ROLE_ADMIN:
                logger.warning(
                    "Cannot use %s as admin: it belongs to a %s account",
                    existing.email,
                    existing.role,
                )
                raise UserAlreadyExistsError("Email already registered to a non-admin account")
            logger.info("Admin %s already exists", existing.email)
            return existing
        return self.create_user(
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
            role=ROLE_ADMIN,
        )

    def authenticate(self, email: Optional[str], password: Optional[str]) -> Optional[User]:
        """Check credentials.

        Returns:
            The matching User, or None if the email is unknown or the
            password is wrong.

        Raises:
            ValidationError: If email or password is missing.
        """
        if not email or not password:
            raise ValidationError("Email and password are required")
        user = self.get_user_by_email(email)
        if user is None or not self.verify_password(password, user.password_hash):
            logger.warning("Failed login attempt for %s", email)
            return None
        return user

    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get a user by email (case-insensitive).

        Args:
            email: Email to look up.

        Returns:
            User object if found, None otherwise.
        """
        model = (
            self.db.query(UserModel)
            .filter(UserModel.email == email.strip().lower())
            .first()
        )
        if model:
            return model_to_user(model)
        return None

    def get_user_by_student_id(self, student_id: str) -> Optional[User]:
        model = self.db.query(UserModel).filter(UserModel.student_id == student_id).first()
        if model:
            return model_to_user(model)
        return None

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        """Get a user by user ID.

        Args:
            user_id: User ID to look up.

        Returns:
            User object if found, None otherwise.
        """
        model = self.db.query(UserModel).filter(UserModel.id == user_id).first()
        if model:
            return model_to_user(model)
        return None

