"""
Database models package for the Faculty Marks Portal
"""

from .user import Faculty
from .academic import Course, Section, section_students
from .assignments import CourseFacultyMapping
from .student import Student
from .marks import ExamRecord, EXAM_TYPES

__all__ = [
    'Faculty', 'Course', 'Section', 'section_students', 'CourseFacultyMapping',
    'Student', 'ExamRecord', 'EXAM_TYPES'
]
