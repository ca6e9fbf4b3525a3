#!/usr/bin/env python3
"""
Sample data generator for the Faculty Marks Portal
Creates faculty, courses, sections, students and course-faculty mappings
"""

from app import create_app
from database import db
from models.user import Faculty
from models.academic import Course, Section
from models.assignments import CourseFacultyMapping
from models.student import Student

def create_sample_data():
    """Create sample data for the portal"""
    app = create_app()

    with app.app_context():
        if Faculty.query.first():
            print("Sample data already present; run init_db.py --reset first to recreate it.")
            return

        print("Creating sample data...")

        # Faculty accounts
        faculty_data = [
            {'employee_code': 'FAC001', 'name': 'Dr. Asha Rao', 'username': 'asha', 'email': 'asha@college.edu',
             'department': 'Computer Science'},
            {'employee_code': 'FAC002', 'name': 'Prof. Ravi Kumar', 'username': 'ravi', 'email': 'ravi@college.edu',
             'department': 'Mathematics'},
            {'employee_code': 'FAC003', 'name': 'Dr. Meera Iyer', 'username': 'meera', 'email': 'meera@college.edu',
             'department': 'Physics'}
        ]

        faculty = []
        for data in faculty_data:
            member = Faculty(**data)
            member.set_password('password123')  # Default password for all faculty
            db.session.add(member)
            faculty.append(member)

        # Courses
        courses_data = [
            {'name': 'Programming Fundamentals', 'code': 'CS101', 'credits': 4},
            {'name': 'Data Structures', 'code': 'CS201', 'credits': 4},
            {'name': 'Calculus', 'code': 'MA101', 'credits': 3},
            {'name': 'Engineering Physics', 'code': 'PH101', 'credits': 3}
        ]

        courses = []
        for data in courses_data:
            course = Course(**data)
            db.session.add(course)
            courses.append(course)

        db.session.commit()
        print(f"✓ Created {len(faculty)} faculty (password: password123)")
        print(f"✓ Created {len(courses)} courses")

        # Students
        students_data = [
            ('CS24001', 'Anil', 'Kumar'), ('CS24002', 'Bhavna', 'Shah'), ('CS24003', 'Chetan', 'Das'),
            ('CS24004', 'Divya', 'Menon'), ('CS24005', 'Eshan', 'Gupta'), ('CS24006', 'Farah', 'Khan'),
            ('CS24007', 'Gautam', 'Nair'), ('CS24008', 'Harini', 'Reddy')
        ]

        students = []
        for roll_number, first_name, last_name in students_data:
            student = Student(
                roll_number=roll_number,
                first_name=first_name,
                last_name=last_name,
                email=f'{roll_number.lower()}@student.college.edu'
            )
            db.session.add(student)
            students.append(student)

        # Sections and enrollment
        a1 = Section(name='A1', semester='2024-Fall')
        a2 = Section(name='A2', semester='2024-Fall')
        a1.students.extend(students[:4])
        a2.students.extend(students[4:])
        db.session.add_all([a1, a2])
        db.session.commit()
        print(f"✓ Created {len(students)} students in sections A1 and A2")

        # Who teaches what, per section
        mappings = [
            (a1, courses[0], faculty[0]),  # Asha -> CS101 in A1
            (a2, courses[1], faculty[0]),  # Asha -> CS201 in A2
            (a1, courses[2], faculty[1]),  # Ravi -> MA101 in A1
            (a2, courses[2], faculty[1]),  # Ravi -> MA101 in A2
            (a1, courses[3], faculty[2])   # Meera -> PH101 in A1
        ]
        for section, course, member in mappings:
            db.session.add(CourseFacultyMapping(section_id=section.id, course_id=course.id, faculty_id=member.id))

        db.session.commit()
        print(f"✓ Created {len(mappings)} course-faculty mappings")

        print("\nSample data creation completed!")
        print("\nLogin credentials:")
        for member in faculty:
            print(f"  - {member.username} / password123")

if __name__ == '__main__':
    create_sample_data()
