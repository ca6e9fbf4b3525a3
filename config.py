"""
Configuration settings for the Faculty Marks Portal
"""

import os

class Config:
    """Base configuration class"""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'faculty-marks-portal-secret-key'

    # Database settings
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///faculty_marks.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Bearer token settings
    TOKEN_MAX_AGE = int(os.environ.get('TOKEN_MAX_AGE', 8 * 60 * 60))  # seconds
    TOKEN_SALT = 'faculty-auth-token'

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Portal client settings
    PORTAL_API_URL = os.environ.get('PORTAL_API_URL') or 'http://localhost:8000'
    PORTAL_REQUEST_TIMEOUT = float(os.environ.get('PORTAL_REQUEST_TIMEOUT', 10))
    SEARCH_DEBOUNCE_SECONDS = float(os.environ.get('SEARCH_DEBOUNCE_SECONDS', 0.4))

    # Security settings
    WTF_CSRF_ENABLED = True
    WTF_CSRF_TIME_LIMIT = None

class TestingConfig(Config):
    """Configuration used by the test suite"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    WTF_CSRF_ENABLED = False
    LOG_LEVEL = 'WARNING'
