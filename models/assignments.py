"""
Assignment models for the Faculty Marks Portal
CourseFacultyMapping model for section-course-faculty relationships
"""

from database import db
from datetime import datetime

class CourseFacultyMapping(db.Model):
    """Which faculty teaches which course within a section"""
    __tablename__ = 'course_faculty_mapping'

    id = db.Column(db.Integer, primary_key=True)
    section_id = db.Column(db.Integer, db.ForeignKey('section.id', ondelete='CASCADE'), nullable=False)
    course_id = db.Column(db.Integer, db.ForeignKey('course.id'), nullable=False)
    faculty_id = db.Column(db.Integer, db.ForeignKey('faculty.id'), nullable=False)
    assigned_at = db.Column(db.DateTime, default=datetime.utcnow)

    # At most one course per faculty within a section
    __table_args__ = (db.UniqueConstraint('section_id', 'faculty_id', name='unique_section_faculty'),)

    def to_dict(self):
        """Convert mapping to dictionary"""
        return {
            'courseId': self.course_id,
            'courseName': self.course.name if self.course else None,
            'courseCode': self.course.code if self.course else None,
            'facultyId': self.faculty_id,
            'facultyName': self.faculty.name if self.faculty else None
        }

    def __repr__(self):
        faculty_name = self.faculty.name if self.faculty else "Unknown"
        course_code = self.course.code if self.course else "Unknown"
        return f'<CourseFacultyMapping {faculty_name} -> {course_code}>'
