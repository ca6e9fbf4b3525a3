"""
Bulk marks form for one exam type, in create or edit mode

Validation runs through a WTForms schema fed with form-encoded values, the
same way a submitted HTML form would be; nothing reaches the network until
:meth:`BulkMutationForm.validate` passes.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from werkzeug.datastructures import MultiDict
from wtforms import Form, FieldList, FloatField, FormField, IntegerField, SelectField, TextAreaField
from wtforms.validators import AnyOf, InputRequired, NumberRange, Optional as OptionalValue, ValidationError

from portal.exceptions import InvalidTransition
from portal.types import Scope, derive_status
from utils.constants import EXAM_TYPES, MAX_TOTAL_MARKS, MIN_TOTAL_MARKS

logger = logging.getLogger(__name__)

class FormMode(Enum):
    CREATE = 'create'
    EDIT = 'edit'

class MarksRowForm(Form):
    student_id = IntegerField(validators=[InputRequired()])
    marks_scored = FloatField(validators=[
        InputRequired(message="Marks scored is required"),
        NumberRange(min=0, message="Marks scored must be at least 0"),
    ])

class BatchSchema(Form):
    exam_type = SelectField(
        choices=[(label, label) for label in EXAM_TYPES],
        validate_choice=False,
        validators=[
            InputRequired(message="Please select an exam type"),
            AnyOf(EXAM_TYPES, message="Please select a valid exam type"),
        ],
    )
    total_marks = FloatField(validators=[
        InputRequired(message="Total marks is required"),
        NumberRange(min=MIN_TOTAL_MARKS, message=f"Total marks must be at least {MIN_TOTAL_MARKS}"),
        NumberRange(max=MAX_TOTAL_MARKS, message=f"Total marks cannot exceed {MAX_TOTAL_MARKS}"),
    ])
    passing_marks = FloatField(validators=[
        InputRequired(message="Passing marks is required"),
        NumberRange(min=0, message="Passing marks must be at least 0"),
    ])
    remarks = TextAreaField(validators=[OptionalValue()])
    student_marks = FieldList(FormField(MarksRowForm))

    def validate_passing_marks(self, field):
        total = self.total_marks.data
        if total is not None and field.data is not None and field.data > total:
            raise ValidationError("Passing marks cannot be greater than total marks")

@dataclass(frozen=True)
class BatchFields:
    """Validated values shared by both request variants."""
    exam_type: str
    total_marks: float
    passing_marks: float
    remarks: str
    rows: Tuple[Tuple[int, float], ...]

    def to_payload(self, scope):
        return {
            'sectionId': scope.section_id,
            'courseId': scope.course_id,
            'facultyId': scope.faculty_id,
            'examType': self.exam_type,
            'totalMarks': self.total_marks,
            'passingMarks': self.passing_marks,
            'remarks': self.remarks,
            'marksData': [
                {'studentId': student_id, 'marksScored': marks_scored}
                for student_id, marks_scored in self.rows
            ],
        }

@dataclass(frozen=True)
class CreateBatchRequest:
    scope: Scope
    fields: BatchFields

    def to_payload(self):
        return self.fields.to_payload(self.scope)

@dataclass(frozen=True)
class ReplaceBatchRequest:
    scope: Scope
    fields: BatchFields

    def to_payload(self):
        return self.fields.to_payload(self.scope)

@dataclass
class RowEntry:
    student_id: int
    marks_scored: object
    student_name: str = ''
    roll_number: str = ''

def _number(value) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None

class BulkMutationForm:
    """Editable batch of per-student marks plus the shared batch fields.

    Values are kept as the user typed them; :meth:`validate` parses them.
    Pass/fail per row is derived on every read from the current values.
    """

    DEFAULT_TOTAL_MARKS = 100
    DEFAULT_PASSING_MARKS = 40

    def __init__(self, mode, scope, exam_type='', total_marks=DEFAULT_TOTAL_MARKS,
                 passing_marks=DEFAULT_PASSING_MARKS, remarks='', rows=(), existing_exam_types=()):
        self.mode = mode
        self.scope = scope
        self.exam_type = exam_type or ''
        self.total_marks = total_marks
        self.passing_marks = passing_marks
        self.remarks = remarks or ''
        self.rows = list(rows)
        self.existing_exam_types = tuple(existing_exam_types)
        self.errors = {}
        self.error_message = None

    @classmethod
    def for_create(cls, scope, students, existing_exam_types=()):
        rows = [RowEntry(student.id, 0, student.name, student.roll_number) for student in students]
        return cls(FormMode.CREATE, scope, rows=rows, existing_exam_types=existing_exam_types)

    @classmethod
    def for_edit(cls, scope, records):
        if not records:
            raise InvalidTransition("No marks data available to edit.")
        first = records[0]
        rows = [
            RowEntry(record.student_id, record.marks_scored, record.student_name, record.roll_number)
            for record in records
        ]
        return cls(
            FormMode.EDIT, scope,
            exam_type=first.exam_type,
            total_marks=first.total_marks,
            passing_marks=first.passing_marks,
            remarks=first.remarks,
            rows=rows,
        )

    @property
    def is_edit(self):
        return self.mode is FormMode.EDIT

    # editing

    def set_exam_type(self, label):
        if self.is_edit:
            raise InvalidTransition("The exam type of an existing batch cannot be changed")
        self.exam_type = label

    def set_total_marks(self, value):
        self.total_marks = value
        # lowering the total re-applies the input ceiling to every row
        for row in self.rows:
            row.marks_scored = self._constrain(row.marks_scored)

    def set_passing_marks(self, value):
        self.passing_marks = value

    def set_remarks(self, value):
        self.remarks = value or ''

    def set_marks(self, student_id, value):
        self._row(student_id).marks_scored = self._constrain(value)

    def _constrain(self, value):
        marks, total = _number(value), _number(self.total_marks)
        if marks is not None and total is not None and marks > total:
            return total
        return value

    def _row(self, student_id):
        for row in self.rows:
            if row.student_id == student_id:
                return row
        raise KeyError(f"Student {student_id} is not part of this batch")

    # derived values

    def status_for(self, student_id):
        """Pass/fail for a row, or None while either value is not a number."""
        marks = _number(self._row(student_id).marks_scored)
        passing = _number(self.passing_marks)
        if marks is None or passing is None:
            return None
        return derive_status(marks, passing)

    def statuses(self):
        return {row.student_id: self.status_for(row.student_id) for row in self.rows}

    @property
    def duplicate_exam_type(self):
        """Create-mode hint; the server still rejects duplicates itself."""
        return not self.is_edit and self.exam_type in self.existing_exam_types

    # validation & submission

    def _formdata(self):
        data = MultiDict()
        for key, value in (('exam_type', self.exam_type), ('total_marks', self.total_marks),
                           ('passing_marks', self.passing_marks), ('remarks', self.remarks)):
            data.add(key, '' if value is None else str(value))
        for index, row in enumerate(self.rows):
            data.add(f'student_marks-{index}-student_id', str(row.student_id))
            data.add(f'student_marks-{index}-marks_scored',
                     '' if row.marks_scored is None else str(row.marks_scored))
        return data

    def _schema(self):
        return BatchSchema(formdata=self._formdata())

    def validate(self):
        """Run the schema; on failure ``errors`` maps field names to messages."""
        schema = self._schema()
        valid = schema.validate()
        if not self.rows:
            valid = False
        self.errors = self._collect_errors(schema)
        if not valid:
            logger.debug("Marks form rejected: %s", self.errors)
        return valid

    def _collect_errors(self, schema):
        errors = {}
        for name in ('exam_type', 'total_marks', 'passing_marks', 'remarks'):
            field_errors = getattr(schema, name).errors
            if field_errors:
                errors[name] = list(field_errors)
        row_errors = {}
        for row, entry in zip(self.rows, schema.student_marks.entries):
            messages = [message for messages in entry.form.errors.values() for message in messages]
            if messages:
                row_errors[row.student_id] = messages
        if row_errors:
            errors['student_marks'] = row_errors
        if not self.rows:
            errors['student_marks'] = {None: ["There are no students to record marks for"]}
        return errors

    def first_error(self):
        for name in ('exam_type', 'total_marks', 'passing_marks', 'remarks'):
            if self.errors.get(name):
                return self.errors[name][0]
        for messages in self.errors.get('student_marks', {}).values():
            return messages[0]
        return None

    def build_request(self):
        """Validated request variant for the form's mode."""
        schema = self._schema()
        if not schema.validate() or not self.rows:
            self.errors = self._collect_errors(schema)
            raise ValueError(self.first_error() or "Marks form is invalid")

        fields = BatchFields(
            exam_type=schema.exam_type.data,
            total_marks=schema.total_marks.data,
            passing_marks=schema.passing_marks.data,
            remarks=schema.remarks.data or '',
            rows=tuple(
                (entry.form.student_id.data, entry.form.marks_scored.data)
                for entry in schema.student_marks.entries
            ),
        )
        if self.is_edit:
            return ReplaceBatchRequest(self.scope, fields)
        return CreateBatchRequest(self.scope, fields)
