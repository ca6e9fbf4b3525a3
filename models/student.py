"""
Student model for the Faculty Marks Portal
"""

from database import db
from datetime import datetime

class Student(db.Model):
    """Student model"""
    __tablename__ = 'student'

    id = db.Column(db.Integer, primary_key=True)
    roll_number = db.Column(db.String(20), unique=True, nullable=False, index=True)
    first_name = db.Column(db.String(50), nullable=False)
    last_name = db.Column(db.String(50), nullable=True)
    email = db.Column(db.String(120), unique=True, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    is_active = db.Column(db.Boolean, default=True)

    # Relationships
    exam_records = db.relationship('ExamRecord', backref='student', lazy='dynamic')

    @property
    def name(self):
        return ' '.join(part for part in (self.first_name, self.last_name) if part)

    def to_dict(self):
        """Convert student to dictionary"""
        return {
            'id': self.id,
            'rollNumber': self.roll_number,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'name': self.name,
            'email': self.email
        }

    def __repr__(self):
        return f'<Student {self.roll_number}: {self.name}>'
