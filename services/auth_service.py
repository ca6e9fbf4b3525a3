"""
Authentication service for the Faculty Marks Portal
Handles login and bearer token issue/verification
"""

import logging

from flask import current_app
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from database import db
from models.user import Faculty

logger = logging.getLogger(__name__)

class AuthService:
    """Authentication service class"""

    @staticmethod
    def _serializer():
        return URLSafeTimedSerializer(
            current_app.config['SECRET_KEY'],
            salt=current_app.config['TOKEN_SALT']
        )

    @staticmethod
    def authenticate_faculty(username, password):
        """Authenticate faculty user"""
        try:
            # Case-insensitive username match
            normalized = (username or '').strip()
            user = (
                Faculty.query
                .filter(func.lower(Faculty.username) == func.lower(normalized))
                .filter_by(is_active=True)
                .first()
            )

            if user and user.check_password(password):
                user.update_last_login()
                logger.info("Faculty %s logged in", user.username)
                return True, user, "Login successful"

            logger.warning("Failed login for username %r", normalized)
            return False, None, "Invalid username or password"

        except SQLAlchemyError as e:
            db.session.rollback()
            logger.exception("Authentication error")
            return False, None, f"Authentication error: {str(e)}"

    @staticmethod
    def issue_token(faculty):
        """Create a signed bearer token for a faculty user"""
        return AuthService._serializer().dumps({'faculty_id': faculty.id, 'role': 'faculty'})

    @staticmethod
    def verify_token(token):
        """Return ``(faculty, message)`` for a bearer token; faculty is None if rejected"""
        if not token:
            return None, "Access denied. No token provided."

        try:
            payload = AuthService._serializer().loads(
                token,
                max_age=current_app.config['TOKEN_MAX_AGE']
            )
        except SignatureExpired:
            return None, "Session expired. Please log in again."
        except BadSignature:
            return None, "Invalid token."

        faculty = db.session.get(Faculty, payload.get('faculty_id'))
        if not faculty or not faculty.is_active:
            return None, "Invalid token."

        return faculty, "Token verified"
