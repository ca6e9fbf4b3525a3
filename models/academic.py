"""
Academic structure models for the Faculty Marks Portal
Course and Section models
"""

from database import db
from datetime import datetime

# Many-to-many enrollment of students into sections
section_students = db.Table(
    'section_student',
    db.Column('section_id', db.Integer, db.ForeignKey('section.id', ondelete='CASCADE'), primary_key=True),
    db.Column('student_id', db.Integer, db.ForeignKey('student.id', ondelete='CASCADE'), primary_key=True)
)

class Course(db.Model):
    """Course taught within sections"""
    __tablename__ = 'course'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    code = db.Column(db.String(20), unique=True, nullable=False, index=True)
    credits = db.Column(db.Integer, default=3)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    is_active = db.Column(db.Boolean, default=True)

    # Relationships
    faculty_mappings = db.relationship('CourseFacultyMapping', backref='course', lazy='dynamic')

    def to_dict(self):
        """Convert course to dictionary"""
        return {
            'id': self.id,
            'name': self.name,
            'code': self.code,
            'credits': self.credits
        }

    def __repr__(self):
        return f'<Course {self.code}: {self.name}>'

class Section(db.Model):
    """A scheduled group of students taught by one or more faculty"""
    __tablename__ = 'section'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), nullable=False)
    semester = db.Column(db.String(50), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    students = db.relationship(
        'Student',
        secondary=section_students,
        backref=db.backref('sections', lazy='dynamic'),
        order_by='Student.roll_number'
    )
    course_faculty_mappings = db.relationship(
        'CourseFacultyMapping',
        backref='section',
        lazy='dynamic',
        cascade='all, delete-orphan'
    )

    __table_args__ = (db.UniqueConstraint('name', 'semester', name='unique_section_name_per_semester'),)

    def get_course_for_faculty(self, faculty_id):
        """Return the course the given faculty teaches here, or None"""
        mapping = self.course_faculty_mappings.filter_by(faculty_id=faculty_id).first()
        return mapping.course if mapping else None

    def has_student(self, student_id):
        """Check if a student is enrolled in this section"""
        return any(student.id == student_id for student in self.students)

    def to_dict(self):
        """Convert section to dictionary"""
        return {
            'id': self.id,
            'name': self.name,
            'semester': self.semester,
            'students': [student.id for student in self.students],
            'courseFacultyMappings': [mapping.to_dict() for mapping in self.course_faculty_mappings]
        }

    def __repr__(self):
        return f'<Section {self.name}>'
