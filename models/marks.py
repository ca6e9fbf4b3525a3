"""
Marks models for the Faculty Marks Portal
ExamRecord model: one student's score for one exam type within a
(section, course, faculty) scope
"""

from database import db
from datetime import datetime
from utils.constants import EXAM_TYPES

class ExamRecord(db.Model):
    """Student marks for one exam type"""
    __tablename__ = 'exam_record'

    id = db.Column(db.Integer, primary_key=True)
    section_id = db.Column(db.Integer, db.ForeignKey('section.id', ondelete='CASCADE'), nullable=False)
    course_id = db.Column(db.Integer, db.ForeignKey('course.id'), nullable=False)
    faculty_id = db.Column(db.Integer, db.ForeignKey('faculty.id'), nullable=False)
    student_id = db.Column(db.Integer, db.ForeignKey('student.id'), nullable=False)
    exam_type = db.Column(db.String(30), nullable=False)
    marks_scored = db.Column(db.Float, nullable=False, default=0.0)
    total_marks = db.Column(db.Float, nullable=False)
    passing_marks = db.Column(db.Float, nullable=False)
    remarks = db.Column(db.String(500), nullable=False, default='')
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # One row per student per exam type within a scope
    __table_args__ = (
        db.UniqueConstraint(
            'section_id', 'course_id', 'faculty_id', 'student_id', 'exam_type',
            name='unique_scope_student_exam_type'
        ),
        db.Index('ix_exam_record_scope', 'section_id', 'course_id', 'faculty_id', 'exam_type'),
    )

    section = db.relationship('Section')
    course = db.relationship('Course')

    @staticmethod
    def scope_query(section_id, course_id, faculty_id, exam_type=None):
        """Query rows for a scope, optionally narrowed to one exam type"""
        query = ExamRecord.query.filter_by(
            section_id=section_id,
            course_id=course_id,
            faculty_id=faculty_id
        )
        if exam_type is not None:
            query = query.filter_by(exam_type=exam_type)
        return query

    def apply_batch(self, marks_scored, total_marks, passing_marks, remarks):
        """Overwrite this row with the values of a replacement batch"""
        self.marks_scored = marks_scored
        self.total_marks = total_marks
        self.passing_marks = passing_marks
        self.remarks = remarks or ''

    def to_dict(self):
        """Convert record to dictionary"""
        return {
            'id': self.id,
            'sectionId': self.section_id,
            'courseId': self.course_id,
            'facultyId': self.faculty_id,
            'studentId': self.student_id,
            'studentName': self.student.name if self.student else None,
            'rollNumber': self.student.roll_number if self.student else None,
            'examType': self.exam_type,
            'marksScored': self.marks_scored,
            'totalMarks': self.total_marks,
            'passingMarks': self.passing_marks,
            'remarks': self.remarks,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None
        }

    def __repr__(self):
        student_roll = self.student.roll_number if self.student else "Unknown"
        return f'<ExamRecord {student_roll} - {self.exam_type}: {self.marks_scored}/{self.total_marks}>'
