"""
Value types exchanged between the portal client and the marks API
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

class ResultStatus(Enum):
    PASS = 'Pass'
    FAIL = 'Fail'

def derive_status(marks_scored: float, passing_marks: float) -> ResultStatus:
    """Pass/fail for a row; computed on every read, never stored."""
    return ResultStatus.PASS if marks_scored >= passing_marks else ResultStatus.FAIL

@dataclass(frozen=True)
class Scope:
    """The (section, course, faculty) triple exam records are partitioned by."""
    section_id: int
    course_id: int
    faculty_id: int

@dataclass(frozen=True)
class StudentRef:
    id: int
    roll_number: str = ''
    name: str = ''

    @classmethod
    def from_json(cls, data):
        return cls(
            id=data['id'],
            roll_number=data.get('rollNumber') or '',
            name=data.get('name') or '',
        )

@dataclass(frozen=True)
class CourseRef:
    id: int
    name: str = 'Unknown Course'
    code: str = ''

@dataclass(frozen=True)
class CourseFacultyMapping:
    course: CourseRef
    faculty_id: int

    @classmethod
    def from_json(cls, data):
        course = CourseRef(
            id=data['courseId'],
            name=data.get('courseName') or 'Unknown Course',
            code=data.get('courseCode') or '',
        )
        return cls(course=course, faculty_id=data['facultyId'])

@dataclass(frozen=True)
class Section:
    id: int
    name: str
    student_ids: Tuple[int, ...] = ()
    mappings: Tuple[CourseFacultyMapping, ...] = ()
    semester: Optional[str] = None

    @classmethod
    def from_json(cls, data):
        return cls(
            id=data['id'],
            name=data['name'],
            student_ids=tuple(data.get('students') or ()),
            mappings=tuple(CourseFacultyMapping.from_json(m) for m in data.get('courseFacultyMappings') or ()),
            semester=data.get('semester'),
        )

@dataclass(frozen=True)
class TeachingSection:
    """A section paired with the course the signed-in faculty teaches in it."""
    section: Section
    course: CourseRef

    def scope(self, faculty_id: int) -> Scope:
        return Scope(self.section.id, self.course.id, faculty_id)

@dataclass(frozen=True)
class ExamRecord:
    student_id: int
    exam_type: str
    marks_scored: float
    total_marks: float
    passing_marks: float
    remarks: str = ''
    student_name: str = ''
    roll_number: str = ''
    id: Optional[int] = field(default=None, compare=False)

    @property
    def status(self) -> ResultStatus:
        return derive_status(self.marks_scored, self.passing_marks)

    @classmethod
    def from_json(cls, data):
        return cls(
            id=data.get('id'),
            student_id=data['studentId'],
            exam_type=data['examType'],
            marks_scored=data['marksScored'],
            total_marks=data['totalMarks'],
            passing_marks=data['passingMarks'],
            remarks=data.get('remarks') or '',
            student_name=data.get('studentName') or '',
            roll_number=data.get('rollNumber') or '',
        )
