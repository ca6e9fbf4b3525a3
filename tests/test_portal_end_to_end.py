"""
End-to-end tests: the portal client driving the real API through the Flask test client
"""

import unittest
from concurrent.futures import ThreadPoolExecutor

import requests

from app import create_app
from config import TestingConfig
from database import db
from models.marks import ExamRecord
from portal.api_client import RemoteResourceClient, login
from portal.controller import ConsistencyController, ControllerState
from portal.section_catalog import SectionCatalog
from portal.types import ResultStatus
from portal_fixtures import BASE_URL, FlaskTestAdapter, seed_institution

class TestPortalEndToEnd(unittest.TestCase):

    def setUp(self):
        """Set up a seeded app, a signed-in client and a controller on section A1"""
        self.app = create_app(TestingConfig)
        self.app_context = self.app.app_context()
        self.app_context.push()
        db.create_all()
        self.ids = seed_institution()

        self.http = requests.Session()
        self.http.mount(BASE_URL, FlaskTestAdapter(self.app.test_client()))
        self.session = login(BASE_URL, 'asha', 'password123', http=self.http)
        self.client = RemoteResourceClient(self.session, http=self.http)

        self.catalog = SectionCatalog(self.client, self.session)
        self.teaching_sections = self.catalog.list_teaching_sections()
        db.session.remove()

        self.executor = ThreadPoolExecutor(max_workers=1)
        self.controller = ConsistencyController(self.session, self.client, executor=self.executor)

    def tearDown(self):
        """Clean up after tests"""
        self.executor.shutdown(wait=True)
        self.client.close()
        db.session.remove()
        db.drop_all()
        self.app_context.pop()

    def select_a1(self):
        return self.controller.select_section(self.teaching_sections[0]).result(5)

    def create_quiz(self):
        form = self.controller.open_create_form()
        form.set_exam_type('Quiz')
        form.set_total_marks(10)
        form.set_passing_marks(4)
        for row, value in zip(form.rows, (3, 4, 8)):
            form.set_marks(row.student_id, value)
        return self.controller.submit_form().result(5)

    def test_session_and_catalog(self):
        self.assertEqual(self.session.faculty_id, self.ids.asha)
        self.assertEqual(self.session.faculty_name, 'Asha Rao')
        self.assertEqual(
            [(item.section.name, item.course.name) for item in self.teaching_sections],
            [('A1', 'Programming Fundamentals')]
        )

    def test_section_with_no_assessments(self):
        self.assertEqual(self.select_a1(), (True, 'No assessments recorded yet'))

        view = self.controller.snapshot()
        self.assertIs(view.state, ControllerState.SECTION_READY)
        self.assertEqual(view.exam_types, ())
        self.assertEqual([student.name for student in self.controller.students],
                         ['Anil Kumar', 'Bhavna Shah', 'Chetan Das'])

    def test_create_quiz_round_trip(self):
        """Creating Quiz 10/4 with 3, 4, 8 shows Fail, Pass, Pass"""
        self.select_a1()
        self.assertEqual(self.create_quiz(), (True, 'Marks added successfully.'))

        view = self.controller.snapshot()
        self.assertEqual(view.exam_types, ('Quiz',))
        self.assertEqual(view.selected_exam_type, 'Quiz')
        self.assertEqual([row.student_name for row in view.rows], ['Anil Kumar', 'Bhavna Shah', 'Chetan Das'])
        self.assertEqual([row.marks_scored for row in view.rows], [3, 4, 8])
        self.assertEqual([row.status for row in view.rows],
                         [ResultStatus.FAIL, ResultStatus.PASS, ResultStatus.PASS])

    def test_edit_passing_marks(self):
        """Raising passing marks to 5 flips Bhavna to Fail without touching her score"""
        self.select_a1()
        self.create_quiz()

        form = self.controller.open_edit_form()
        form.set_passing_marks(5)
        self.assertEqual(self.controller.submit_form().result(5), (True, 'Marks updated successfully.'))

        bhavna = self.controller.snapshot().rows[1]
        self.assertEqual(bhavna.student_name, 'Bhavna Shah')
        self.assertEqual(bhavna.marks_scored, 4)
        self.assertEqual(bhavna.passing_marks, 5)
        self.assertIs(bhavna.status, ResultStatus.FAIL)

        stored = ExamRecord.query.filter_by(student_id=self.ids.students[1], exam_type='Quiz').one()
        self.assertEqual((stored.marks_scored, stored.passing_marks), (4, 5))

    def test_duplicate_create_rejected(self):
        self.select_a1()
        self.create_quiz()

        form = self.controller.open_create_form()
        form.set_exam_type('Quiz')
        self.assertTrue(form.duplicate_exam_type)
        success, message = self.controller.submit_form().result(5)

        self.assertFalse(success)
        self.assertEqual(message, 'Marks have already been added for this section, course, faculty, and exam type')
        self.assertIs(self.controller.form, form)
        self.assertEqual(ExamRecord.query.count(), 3)

    def test_delete_exam_type(self):
        self.select_a1()
        self.create_quiz()

        self.assertEqual(self.controller.delete_exam_type('Quiz').result(5), (True, 'Marks deleted successfully.'))

        view = self.controller.snapshot()
        self.assertEqual(view.exam_types, ())
        self.assertEqual(view.rows, ())
        self.assertEqual(self.client.list_records(self.controller.scope, 'Quiz'), [])

    def test_switch_exam_types(self):
        self.select_a1()
        self.create_quiz()

        form = self.controller.open_create_form()
        form.set_exam_type('Final Lab')
        for row in form.rows:
            form.set_marks(row.student_id, 55)
        self.assertTrue(self.controller.submit_form().result(5)[0])
        self.assertEqual(self.controller.snapshot().exam_types, ('Quiz', 'Final Lab'))

        self.assertTrue(self.controller.select_exam_type('Quiz').result(5)[0])
        self.assertEqual([row.marks_scored for row in self.controller.snapshot().rows], [3, 4, 8])

if __name__ == '__main__':
    unittest.main()
