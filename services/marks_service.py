"""
Marks service for the Faculty Marks Portal
Bulk add/update/delete of exam records for a (section, course, faculty) scope

Every method returns ``(success, data, message, code)``; ``code`` is the
HTTP status the route responds with.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from database import db, DatabaseError
from models.marks import ExamRecord, EXAM_TYPES
from models.student import Student
from services.section_service import SectionService
from utils.db_helpers import safe_add_all_and_commit, safe_update_and_commit, delete_query_and_commit
from utils.validators import validate_batch_payload, validate_exam_type

logger = logging.getLogger(__name__)

class MarksService:
    """Marks service class"""

    @staticmethod
    def _normalize(payload):
        """Coerce a validated payload into typed batch values"""
        return {
            'section_id': int(payload['sectionId']),
            'course_id': int(payload['courseId']),
            'faculty_id': int(payload['facultyId']),
            'exam_type': payload['examType'],
            'total_marks': float(payload['totalMarks']),
            'passing_marks': float(payload['passingMarks']),
            'remarks': payload.get('remarks') or '',
            'rows': {int(row['studentId']): float(row['marksScored']) for row in payload['marksData']}
        }

    @staticmethod
    def _prepare(payload, acting_faculty_id):
        """Validate payload and scope; returns ``(batch, section, message, code)``"""
        is_valid, message = validate_batch_payload(payload)
        if not is_valid:
            logger.warning("Rejected marks payload: %s", message)
            return None, None, message, 400

        batch = MarksService._normalize(payload)
        allowed, section, message, code = SectionService.check_scope(
            batch['section_id'], batch['course_id'], batch['faculty_id'], acting_faculty_id
        )
        if not allowed:
            logger.warning("Scope check failed for faculty %s: %s", acting_faculty_id, message)
            return None, None, message, code

        return batch, section, "Valid", 200

    @staticmethod
    def bulk_add(payload, acting_faculty_id):
        """Create one record per student for a new exam type"""
        try:
            batch, section, message, code = MarksService._prepare(payload, acting_faculty_id)
            if batch is None:
                return False, None, message, code

            for student_id in batch['rows']:
                if not section.has_student(student_id):
                    return False, None, f"Student {student_id} is not enrolled in this section", 400

            existing = ExamRecord.scope_query(
                batch['section_id'], batch['course_id'], batch['faculty_id'], batch['exam_type']
            ).first()
            if existing:
                message = "Marks have already been added for this section, course, faculty, and exam type"
                logger.warning(message)
                return False, None, message, 409

            records = [
                ExamRecord(
                    section_id=batch['section_id'],
                    course_id=batch['course_id'],
                    faculty_id=batch['faculty_id'],
                    student_id=student_id,
                    exam_type=batch['exam_type'],
                    marks_scored=marks_scored,
                    total_marks=batch['total_marks'],
                    passing_marks=batch['passing_marks'],
                    remarks=batch['remarks']
                )
                for student_id, marks_scored in batch['rows'].items()
            ]

            success, message = safe_add_all_and_commit(records)
            if not success:
                return False, None, message, 409

            logger.info("Bulk marks added: %s for section %s (%d rows)",
                        batch['exam_type'], batch['section_id'], len(records))
            return True, {'insertedCount': len(records)}, "Bulk marks added successfully", 201

        except (SQLAlchemyError, DatabaseError):
            db.session.rollback()
            logger.exception("Error adding bulk marks")
            return False, None, "Internal Server Error", 500

    @staticmethod
    def bulk_update(payload, acting_faculty_id):
        """Replace the shared fields and scores of an existing exam type

        Students without an existing record are ignored. Shared fields are
        applied to every row of the exam type so the batch stays uniform.
        """
        try:
            batch, section, message, code = MarksService._prepare(payload, acting_faculty_id)
            if batch is None:
                return False, None, message, code

            existing = ExamRecord.scope_query(
                batch['section_id'], batch['course_id'], batch['faculty_id'], batch['exam_type']
            ).all()
            if not existing:
                message = "No marks found for this section, course, faculty, and exam type"
                logger.warning(message)
                return False, None, message, 404

            matched = 0
            modified = 0
            for record in existing:
                marks_scored = batch['rows'].get(record.student_id)
                if marks_scored is None:
                    marks_scored = record.marks_scored
                    if marks_scored > batch['total_marks']:
                        db.session.rollback()
                        return False, None, (
                            f"Existing marks for student {record.student_id} exceed the new total marks"
                        ), 400
                else:
                    matched += 1

                before = (record.marks_scored, record.total_marks, record.passing_marks, record.remarks)
                record.apply_batch(marks_scored, batch['total_marks'], batch['passing_marks'], batch['remarks'])
                if before != (record.marks_scored, record.total_marks, record.passing_marks, record.remarks):
                    modified += 1

            success, message = safe_update_and_commit()
            if not success:
                return False, None, message, 400

            logger.info("Bulk marks updated: %s for section %s (%d matched, %d modified)",
                        batch['exam_type'], batch['section_id'], matched, modified)
            return True, {'matched': matched, 'modified': modified}, "Bulk marks updated successfully", 200

        except (SQLAlchemyError, DatabaseError):
            db.session.rollback()
            logger.exception("Error updating bulk marks")
            return False, None, "Internal Server Error", 500

    @staticmethod
    def get_exam_types(section_id, course_id, faculty_id, acting_faculty_id):
        """Distinct exam types with at least one record in the scope"""
        try:
            allowed, _, message, code = SectionService.check_scope(
                section_id, course_id, faculty_id, acting_faculty_id
            )
            if not allowed:
                return False, None, message, code

            rows = (
                db.session.query(ExamRecord.exam_type)
                .filter_by(section_id=section_id, course_id=course_id, faculty_id=faculty_id)
                .distinct()
                .all()
            )
            order = {label: index for index, label in enumerate(EXAM_TYPES)}
            exam_types = sorted((row[0] for row in rows), key=lambda label: order.get(label, len(order)))
            return True, exam_types, "Exam types retrieved successfully", 200

        except SQLAlchemyError:
            logger.exception("Error loading exam types")
            return False, None, "Internal Server Error", 500

    @staticmethod
    def get_records(section_id, course_id, faculty_id, exam_type, acting_faculty_id):
        """Records for one exam type, ordered by student name"""
        try:
            is_valid, message = validate_exam_type(exam_type)
            if not is_valid:
                return False, None, message, 400

            allowed, _, message, code = SectionService.check_scope(
                section_id, course_id, faculty_id, acting_faculty_id
            )
            if not allowed:
                return False, None, message, code

            records = (
                ExamRecord.scope_query(section_id, course_id, faculty_id, exam_type)
                .join(Student, Student.id == ExamRecord.student_id)
                .order_by(Student.first_name.asc(), Student.last_name.asc(), Student.roll_number.asc())
                .all()
            )
            return True, records, "Marks records retrieved successfully", 200

        except SQLAlchemyError:
            logger.exception("Error loading marks records")
            return False, None, "Internal Server Error", 500

    @staticmethod
    def delete_by_exam_type(section_id, course_id, faculty_id, exam_type, acting_faculty_id):
        """Delete every record of one exam type in a single transaction"""
        try:
            allowed, _, message, code = SectionService.check_scope(
                section_id, course_id, faculty_id, acting_faculty_id
            )
            if not allowed:
                return False, None, message, code

            deleted_count = delete_query_and_commit(
                ExamRecord.scope_query(section_id, course_id, faculty_id, exam_type)
            )
            if deleted_count == 0:
                message = "No marks found for this section, course, faculty, and exam type"
                logger.warning(message)
                return False, None, message, 404

            logger.info("Marks deleted: %s for section %s (%d rows)", exam_type, section_id, deleted_count)
            return True, {'deletedCount': deleted_count}, "Marks deleted successfully", 200

        except DatabaseError:
            return False, None, "Internal Server Error", 500
