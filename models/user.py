"""
User models for the Faculty Marks Portal
"""

from database import db
from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash

class Faculty(db.Model):
    """Faculty user model"""
    __tablename__ = 'faculty'

    id = db.Column(db.Integer, primary_key=True)
    employee_code = db.Column(db.String(20), unique=True, nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=True)
    department = db.Column(db.String(100), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    last_login = db.Column(db.DateTime)
    is_active = db.Column(db.Boolean, default=True)

    # Relationships
    course_mappings = db.relationship('CourseFacultyMapping', backref='faculty', lazy='dynamic')
    exam_records = db.relationship('ExamRecord', backref='faculty', lazy='dynamic')

    def set_password(self, password):
        """Set password hash"""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        """Check password against hash"""
        return check_password_hash(self.password_hash, password)

    def update_last_login(self):
        """Update last login timestamp"""
        self.last_login = datetime.utcnow()
        db.session.commit()

    def get_teaching_sections(self):
        """Sections where this faculty has at least one course mapping"""
        seen = {}
        for mapping in self.course_mappings:
            seen.setdefault(mapping.section_id, mapping.section)
        return sorted(seen.values(), key=lambda section: section.name)

    def to_dict(self):
        """Convert faculty to dictionary for JSON serialization"""
        return {
            'id': self.id,
            'employeeCode': self.employee_code,
            'name': self.name,
            'username': self.username,
            'email': self.email,
            'department': self.department,
            'isActive': self.is_active
        }

    def __repr__(self):
        return f'<Faculty {self.employee_code}: {self.name}>'
