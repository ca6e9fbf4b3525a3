"""
Validation utilities for the Faculty Marks Portal
"""

import math
import re

from utils.constants import EXAM_TYPES, MIN_TOTAL_MARKS, MAX_TOTAL_MARKS

def validate_username(username):
    """Validate username format"""
    if not username or len(username.strip()) == 0:
        return False, "Username is required"

    if len(username) < 3:
        return False, "Username must be at least 3 characters long"

    if len(username) > 80:
        return False, "Username must be 80 characters or less"

    # Allow alphanumeric and underscore
    if not re.match(r'^[A-Za-z0-9_]+$', username):
        return False, "Username can only contain letters, numbers, and underscores"

    return True, "Valid username"

def validate_exam_type(exam_type):
    """Validate exam type against the fixed enumeration"""
    if not exam_type or len(str(exam_type).strip()) == 0:
        return False, "Exam type is required"

    if exam_type not in EXAM_TYPES:
        return False, f"Exam type must be one of: {', '.join(EXAM_TYPES)}"

    return True, "Valid exam type"

def validate_total_marks(total_marks):
    """Validate total marks for a batch"""
    try:
        total = float(total_marks)
    except (ValueError, TypeError):
        return False, "Total marks must be a valid number"

    if not math.isfinite(total):
        return False, "Total marks must be a valid number"

    if total < MIN_TOTAL_MARKS:
        return False, f"Total marks must be at least {MIN_TOTAL_MARKS}"

    if total > MAX_TOTAL_MARKS:
        return False, f"Total marks cannot exceed {MAX_TOTAL_MARKS}"

    return True, "Valid total marks"

def validate_passing_marks(passing_marks, total_marks):
    """Validate passing marks against total marks"""
    try:
        passing = float(passing_marks)
        total = float(total_marks)
    except (ValueError, TypeError):
        return False, "Passing marks must be a valid number"

    if not (math.isfinite(passing) and math.isfinite(total)):
        return False, "Passing marks must be a valid number"

    if passing < 0 or passing > total:
        return False, "Passing marks must be between 0 and total marks"

    return True, "Valid passing marks"

def validate_marks(marks, max_marks):
    """Validate marks against maximum marks"""
    try:
        marks_float = float(marks)
        max_marks_float = float(max_marks)

        if not (math.isfinite(marks_float) and math.isfinite(max_marks_float)):
            return False, "Marks must be a valid number"

        if marks_float < 0:
            return False, "Marks cannot be negative"

        if marks_float > max_marks_float:
            return False, f"Marks cannot exceed maximum marks ({max_marks_float:g})"

        return True, "Valid marks"
    except (ValueError, TypeError):
        return False, "Marks must be a valid number"

def validate_id(value, field_name):
    """Validate a positive integer identifier"""
    try:
        if isinstance(value, bool):
            raise TypeError
        id_int = int(value)
    except (ValueError, TypeError, OverflowError):
        return False, f"{field_name} must be a valid identifier"

    if id_int <= 0:
        return False, f"{field_name} must be a valid identifier"

    return True, f"Valid {field_name.lower()}"

def validate_batch_payload(payload):
    """Validate a bulk marks payload

    Returns ``(is_valid, message)``. Checks run in the same order the
    portal form checks them: scope identifiers, exam type, totals, then
    each row.
    """
    if not isinstance(payload, dict):
        return False, "Request body must be a JSON object"

    for key, label in (('sectionId', 'Section ID'), ('courseId', 'Course ID'), ('facultyId', 'Faculty ID')):
        if payload.get(key) in (None, ''):
            return False, "Section ID, Course ID, Faculty ID, and Exam Type are required"
        is_valid, message = validate_id(payload[key], label)
        if not is_valid:
            return False, message

    is_valid, message = validate_exam_type(payload.get('examType'))
    if not is_valid:
        return False, message

    if payload.get('totalMarks') is None or payload.get('passingMarks') is None:
        return False, "Total marks and passing marks are required"

    is_valid, message = validate_total_marks(payload['totalMarks'])
    if not is_valid:
        return False, message

    is_valid, message = validate_passing_marks(payload['passingMarks'], payload['totalMarks'])
    if not is_valid:
        return False, message

    remarks = payload.get('remarks')
    if remarks is not None and not isinstance(remarks, str):
        return False, "Remarks must be text"

    marks_data = payload.get('marksData')
    if not isinstance(marks_data, list) or len(marks_data) == 0:
        return False, "Marks data must be a non-empty array"

    seen = set()
    for row in marks_data:
        if not isinstance(row, dict):
            return False, "Each marks entry must be an object"
        is_valid, message = validate_id(row.get('studentId'), 'Student ID')
        if not is_valid:
            return False, message
        student_id = int(row['studentId'])
        if student_id in seen:
            return False, f"Student {student_id} appears more than once"
        seen.add(student_id)

        is_valid, message = validate_marks(row.get('marksScored'), payload['totalMarks'])
        if not is_valid:
            return False, f"Marks scored for student {student_id}: {message}"

    return True, "Valid marks payload"
