"""
Section service for the Faculty Marks Portal
Sections taught by a faculty and the students enrolled in them
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from database import db
from models.academic import Section
from models.user import Faculty

logger = logging.getLogger(__name__)

class SectionService:
    """Section service class"""

    @staticmethod
    def get_faculty_sections(faculty_id):
        """Get all sections where the faculty has a course mapping"""
        try:
            faculty = db.session.get(Faculty, faculty_id)
            if not faculty:
                return False, None, "Faculty not found", 404

            sections = faculty.get_teaching_sections()
            logger.info("Sections retrieved for faculty %s: %d", faculty_id, len(sections))
            return True, sections, "Sections retrieved successfully", 200
        except SQLAlchemyError:
            logger.exception("Error loading sections for faculty %s", faculty_id)
            return False, None, "Internal Server Error", 500

    @staticmethod
    def get_section_students(section_id):
        """Get students enrolled in a section, ordered by roll number"""
        try:
            section = db.session.get(Section, section_id)
            if not section:
                return False, None, "Section not found", 404

            return True, list(section.students), "Students retrieved successfully", 200
        except SQLAlchemyError:
            logger.exception("Error loading students for section %s", section_id)
            return False, None, "Internal Server Error", 500

    @staticmethod
    def check_scope(section_id, course_id, faculty_id, acting_faculty_id):
        """Verify the acting faculty owns the (section, course, faculty) scope

        Returns ``(allowed, section, message, code)``.
        """
        if int(faculty_id) != int(acting_faculty_id):
            return False, None, "You can only manage your own marks", 403

        section = db.session.get(Section, section_id)
        if not section:
            return False, None, "Section not found", 404

        course = section.get_course_for_faculty(faculty_id)
        if course is None or course.id != int(course_id):
            return False, None, "You are not assigned to this course in this section", 403

        return True, section, "Scope verified", 200
