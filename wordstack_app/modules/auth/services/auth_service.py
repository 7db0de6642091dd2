"""
Auth Service - Core authentication logic.

Handles user registration and credential checks.
Decouples DB logic from Routes.
"""
from typing import Optional

from flask import current_app
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError

from ....core.error_handlers import ConflictError
from ....core.extensions import db
from ....models import User
from ....utils.db_session import safe_commit


class AuthService:
    """Service for Authentication related operations."""

    @staticmethod
    def register_user(username: str, email: str, password: str) -> User:
        """
        Register a new user.

        Raises:
            ConflictError: username or email already taken.
        """
        username = username.strip()
        email = email.strip().lower()
        taken = User.query.filter(
            or_(func.lower(User.username) == username.lower(), User.email == email)
        ).first()
        if taken is not None:
            raise ConflictError('Username or email is already registered.')

        user = User(username=username, email=email)
        user.set_password(password)
        try:
            with db.session.begin_nested():
                db.session.add(user)
        except IntegrityError as e:
            raise ConflictError('Username or email is already registered.') from e
        safe_commit(db.session)

        current_app.logger.info(f"User registered: {username} ({user.user_id})")
        return user

    @staticmethod
    def authenticate(login: str, password: str) -> Optional[User]:
        """Return the user when the credentials match, else ``None``."""
        login = (login or '').strip()
        user = User.query.filter(
            or_(User.username == login, User.email == login.lower())
        ).first()
        if user is None or not user.check_password(password):
            current_app.logger.info(f"Failed login attempt for '{login}'")
            return None
        return user
