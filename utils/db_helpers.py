"""
Database helper utilities for the Faculty Marks Portal
"""

import logging

from database import db, handle_db_error
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)

@handle_db_error
def safe_add_all_and_commit(objects):
    """Add a batch of objects in a single transaction"""
    try:
        db.session.add_all(objects)
        db.session.commit()
        return True, f"Successfully inserted {len(objects)} records"
    except IntegrityError as e:
        db.session.rollback()
        logger.warning("Integrity error on batch insert: %s", e.orig)
        if 'UNIQUE constraint failed' in str(e):
            return False, "Record with this identifier already exists"
        return False, "Database constraint violation"

@handle_db_error
def safe_update_and_commit():
    """Safely commit database changes with error handling"""
    try:
        db.session.commit()
        return True, "Records updated successfully"
    except IntegrityError as e:
        db.session.rollback()
        logger.warning("Integrity error on update: %s", e.orig)
        if 'UNIQUE constraint failed' in str(e):
            return False, "Duplicate entry found"
        return False, "Database constraint violation"

@handle_db_error
def delete_query_and_commit(query):
    """Bulk-delete every row matched by ``query`` in one transaction"""
    deleted_count = query.delete(synchronize_session=False)
    db.session.commit()
    return deleted_count
