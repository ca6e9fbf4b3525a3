"""
Faculty routes for the Faculty Marks Portal
Sections a faculty teaches and the students enrolled in a section
"""

from flask import Blueprint, g

from routes.auth import api_response, token_required
from services.section_service import SectionService

faculty_bp = Blueprint('faculty', __name__)
section_bp = Blueprint('section', __name__)

@faculty_bp.route('/<int:faculty_id>/sections')
@token_required
def faculty_sections(faculty_id):
    """Sections with a course mapping for the faculty"""
    if faculty_id != g.current_faculty.id:
        return api_response('You can only view your own sections', code=403)

    success, sections, message, code = SectionService.get_faculty_sections(faculty_id)
    if not success:
        return api_response(message, code=code)

    return api_response(message, {'sections': [section.to_dict() for section in sections]}, code)

@section_bp.route('/<int:section_id>/students')
@token_required
def section_students(section_id):
    """Students enrolled in a section"""
    success, students, message, code = SectionService.get_section_students(section_id)
    if not success:
        return api_response(message, code=code)

    return api_response(message, {'students': [student.to_dict() for student in students]}, code)
