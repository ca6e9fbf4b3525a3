"""
Unit tests for the bulk marks form
"""

import unittest

from portal.exceptions import InvalidTransition
from portal.forms import BulkMutationForm, CreateBatchRequest, FormMode, ReplaceBatchRequest
from portal.types import ResultStatus, Scope, derive_status
from portal_fixtures import make_records, make_students

SCOPE = Scope(section_id=1, course_id=2, faculty_id=3)

class TestDerivedStatus(unittest.TestCase):

    def test_derive_status(self):
        self.assertIs(derive_status(4, 4), ResultStatus.PASS)
        self.assertIs(derive_status(3.5, 4), ResultStatus.FAIL)
        self.assertIs(derive_status(0, 0), ResultStatus.PASS)

    def test_record_status_follows_values(self):
        records = make_records('Quiz', [3, 4, 8], total=10, passing=4)
        self.assertEqual([record.status for record in records],
                         [ResultStatus.FAIL, ResultStatus.PASS, ResultStatus.PASS])

class TestCreateForm(unittest.TestCase):

    def setUp(self):
        self.students = make_students('Anil', 'Bhavna', 'Chetan')
        self.form = BulkMutationForm.for_create(SCOPE, self.students, existing_exam_types=['Final'])

    def fill_quiz(self):
        self.form.set_exam_type('Quiz')
        self.form.set_total_marks(10)
        self.form.set_passing_marks(4)
        for student, value in zip(self.students, (3, 4, 8)):
            self.form.set_marks(student.id, value)

    def test_defaults(self):
        """Test one row per enrolled student with default batch values"""
        self.assertIs(self.form.mode, FormMode.CREATE)
        self.assertEqual(self.form.exam_type, '')
        self.assertEqual(self.form.total_marks, 100)
        self.assertEqual(self.form.passing_marks, 40)
        self.assertEqual(self.form.remarks, '')
        self.assertEqual([(row.student_id, row.marks_scored) for row in self.form.rows], [(1, 0), (2, 0), (3, 0)])

    def test_quiz_scenario_statuses(self):
        self.fill_quiz()
        self.assertEqual(self.form.statuses(), {
            1: ResultStatus.FAIL,
            2: ResultStatus.PASS,
            3: ResultStatus.PASS,
        })

        # Raising the bar recomputes immediately
        self.form.set_passing_marks(5)
        self.assertIs(self.form.status_for(2), ResultStatus.FAIL)

    def test_status_unknown_for_blank_input(self):
        self.fill_quiz()
        self.form.set_marks(2, '')
        self.assertIsNone(self.form.status_for(2))

    def test_marks_clamped_to_total(self):
        self.form.set_total_marks(10)
        self.form.set_marks(1, 14)
        self.assertEqual(self.form.rows[0].marks_scored, 10)

        # Lowering the total re-clamps existing entries
        self.form.set_marks(3, 9)
        self.form.set_total_marks(6)
        self.assertEqual(self.form.rows[2].marks_scored, 6)
        self.assertEqual(self.form.rows[1].marks_scored, 0)

    def test_valid_form_builds_create_request(self):
        self.fill_quiz()
        self.form.set_remarks('Surprise quiz')

        self.assertTrue(self.form.validate())
        self.assertEqual(self.form.errors, {})

        request = self.form.build_request()
        self.assertIsInstance(request, CreateBatchRequest)
        self.assertEqual(request.fields.exam_type, 'Quiz')
        self.assertEqual(request.fields.rows, ((1, 3), (2, 4), (3, 8)))

        payload = request.to_payload()
        self.assertEqual(payload['sectionId'], 1)
        self.assertEqual(payload['courseId'], 2)
        self.assertEqual(payload['facultyId'], 3)
        self.assertEqual(payload['totalMarks'], 10)
        self.assertEqual(payload['passingMarks'], 4)
        self.assertEqual(payload['remarks'], 'Surprise quiz')
        self.assertEqual(payload['marksData'][2], {'studentId': 3, 'marksScored': 8})

    def test_passing_above_total_rejected(self):
        """Test passing marks greater than total marks is attached to passing marks"""
        self.fill_quiz()
        self.form.set_passing_marks(11)

        self.assertFalse(self.form.validate())
        self.assertEqual(self.form.errors['passing_marks'], ['Passing marks cannot be greater than total marks'])
        self.assertEqual(self.form.first_error(), 'Passing marks cannot be greater than total marks')
        with self.assertRaises(ValueError):
            self.form.build_request()

    def test_exam_type_required_and_enumerated(self):
        self.form.set_total_marks(10)
        self.form.set_passing_marks(4)

        self.assertFalse(self.form.validate())
        self.assertEqual(self.form.errors['exam_type'], ['Please select an exam type'])

        self.form.set_exam_type('Pop Quiz')
        self.assertFalse(self.form.validate())
        self.assertEqual(self.form.errors['exam_type'], ['Please select a valid exam type'])

    def test_total_marks_bounds(self):
        self.fill_quiz()

        self.form.set_total_marks(0)
        self.assertFalse(self.form.validate())
        self.assertIn('Total marks must be at least 1', self.form.errors['total_marks'])

        self.form.set_total_marks(1001)
        self.assertFalse(self.form.validate())
        self.assertIn('Total marks cannot exceed 1000', self.form.errors['total_marks'])

        self.form.set_total_marks('')
        self.assertFalse(self.form.validate())
        self.assertEqual(self.form.errors['total_marks'], ['Total marks is required'])

    def test_negative_marks_rejected_per_row(self):
        self.fill_quiz()
        self.form.set_marks(2, -1)

        self.assertFalse(self.form.validate())
        self.assertEqual(self.form.errors['student_marks'], {2: ['Marks scored must be at least 0']})

    def test_duplicate_exam_type_hint(self):
        self.form.set_exam_type('Final')
        self.assertTrue(self.form.duplicate_exam_type)
        self.form.set_exam_type('Quiz')
        self.assertFalse(self.form.duplicate_exam_type)

    def test_no_students(self):
        form = BulkMutationForm.for_create(SCOPE, [])
        form.set_exam_type('Quiz')
        self.assertFalse(form.validate())
        self.assertEqual(form.first_error(), 'There are no students to record marks for')

class TestEditForm(unittest.TestCase):

    def setUp(self):
        self.records = make_records('Quiz', [3, 4, 8], total=10, passing=4)
        self.form = BulkMutationForm.for_edit(SCOPE, self.records)

    def test_prepopulated_from_loaded_rows(self):
        self.assertTrue(self.form.is_edit)
        self.assertEqual(self.form.exam_type, 'Quiz')
        self.assertEqual((self.form.total_marks, self.form.passing_marks), (10, 4))
        self.assertEqual([row.marks_scored for row in self.form.rows], [3, 4, 8])

    def test_exam_type_is_fixed(self):
        with self.assertRaises(InvalidTransition):
            self.form.set_exam_type('Final')
        self.assertEqual(self.form.exam_type, 'Quiz')

    def test_raising_passing_marks_builds_replace_request(self):
        """Test the edit scenario: raising passing marks flips a pass to a fail"""
        self.form.set_passing_marks(5)
        self.assertIs(self.form.status_for(2), ResultStatus.FAIL)

        request = self.form.build_request()
        self.assertIsInstance(request, ReplaceBatchRequest)
        self.assertEqual(request.fields.passing_marks, 5)
        self.assertEqual(dict(request.fields.rows)[2], 4)

    def test_edit_requires_rows(self):
        with self.assertRaises(InvalidTransition):
            BulkMutationForm.for_edit(SCOPE, [])

if __name__ == '__main__':
    unittest.main()
