"""
Marks routes for the Faculty Marks Portal
Bulk exam-record endpoints used by the faculty portal client
"""

from flask import Blueprint, request, g

from routes.auth import api_response, token_required
from services.marks_service import MarksService

marks_bp = Blueprint('marks', __name__)

SCOPE = '/section/<int:section_id>/course/<int:course_id>/faculty/<int:faculty_id>'

@marks_bp.route('/exam-types/<int:section_id>/course/<int:course_id>/faculty/<int:faculty_id>')
@token_required
def exam_types(section_id, course_id, faculty_id):
    """Distinct exam types recorded for a scope"""
    success, labels, message, code = MarksService.get_exam_types(
        section_id, course_id, faculty_id, g.current_faculty.id
    )
    if not success:
        return api_response(message, code=code)

    return api_response(message, {'examTypes': labels}, code)

@marks_bp.route(SCOPE + '/exam-type/<exam_type>', methods=['GET'])
@token_required
def records(section_id, course_id, faculty_id, exam_type):
    """Records for one exam type"""
    success, rows, message, code = MarksService.get_records(
        section_id, course_id, faculty_id, exam_type, g.current_faculty.id
    )
    if not success:
        return api_response(message, code=code)

    return api_response(message, {'marks': [row.to_dict() for row in rows]}, code)

@marks_bp.route('/bulk-add', methods=['POST'])
@token_required
def bulk_add():
    """Create a batch for a new exam type"""
    payload = request.get_json(silent=True)
    success, data, message, code = MarksService.bulk_add(payload, g.current_faculty.id)
    return api_response(message, data, code)

@marks_bp.route('/bulk-update', methods=['PUT'])
@token_required
def bulk_update():
    """Replace an existing batch"""
    payload = request.get_json(silent=True)
    success, data, message, code = MarksService.bulk_update(payload, g.current_faculty.id)
    return api_response(message, data, code)

@marks_bp.route(SCOPE + '/exam-type/<exam_type>', methods=['DELETE'])
@token_required
def delete_exam_type(section_id, course_id, faculty_id, exam_type):
    """Delete every record of an exam type"""
    success, data, message, code = MarksService.delete_by_exam_type(
        section_id, course_id, faculty_id, exam_type, g.current_faculty.id
    )
    return api_response(message, data, code)
