"""
Database configuration and initialization for the Faculty Marks Portal
"""

import logging
import sqlite3
from functools import wraps

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

# Initialize SQLAlchemy instance
db = SQLAlchemy()

@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Enable foreign key constraints for SQLite"""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

def init_db(app):
    """Create all tables with application context"""
    with app.app_context():
        # Import all models to ensure they are registered
        from models import (
            Faculty, Course, Section, CourseFacultyMapping, Student, ExamRecord
        )

        db.create_all()
        logger.info("Database initialized at %s", app.config['SQLALCHEMY_DATABASE_URI'])

def reset_database(app):
    """Reset database - WARNING: This will delete all data"""
    with app.app_context():
        db.drop_all()
        db.create_all()
        logger.warning("Database reset completed")

class DatabaseError(Exception):
    """Custom exception for database operations"""
    pass

def handle_db_error(func):
    """Decorator that rolls back the session and re-raises as DatabaseError"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.exception("Database operation %s failed", func.__name__)
            raise DatabaseError(f"Database operation failed: {str(e)}") from e
    return wrapper
