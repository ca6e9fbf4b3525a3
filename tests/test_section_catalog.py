"""
Unit tests for the section catalog and course lookup
"""

import threading
import unittest

from config import Config
from portal.exceptions import CourseNotMappedError, NetworkError
from portal.section_catalog import CourseLookup, SectionCatalog
from portal.session import FacultySession
from portal.types import CourseFacultyMapping, CourseRef, Section
from portal_fixtures import make_section

FACULTY_ID = 7

class SectionsClient:

    def __init__(self, sections=None, error=None):
        self.sections = sections or []
        self.error = error
        self.calls = 0

    def list_sections(self, faculty_id):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.sections)

def shared_section():
    """A section where two faculty teach different courses"""
    return Section(
        id=3,
        name='C2',
        mappings=(
            CourseFacultyMapping(CourseRef(30, 'Physics'), 99),
            CourseFacultyMapping(CourseRef(31, 'Data Structures'), FACULTY_ID),
        ),
    )

class TestCourseLookup(unittest.TestCase):

    def test_resolve(self):
        lookup = CourseLookup.build([
            make_section(1, 'A1', 10, 'Programming Fundamentals', FACULTY_ID),
            shared_section(),
        ])

        self.assertEqual(lookup.resolve(1, FACULTY_ID).name, 'Programming Fundamentals')
        self.assertEqual(lookup.resolve(3, FACULTY_ID).name, 'Data Structures')
        self.assertEqual(lookup.resolve(3, 99).name, 'Physics')
        self.assertEqual(len(lookup), 3)

    def test_unmapped_section(self):
        lookup = CourseLookup.build([make_section(1, 'A1', 10, 'Programming Fundamentals', 99)])

        self.assertNotIn((1, FACULTY_ID), lookup)
        with self.assertRaises(CourseNotMappedError) as context:
            lookup.resolve(1, FACULTY_ID)
        self.assertEqual(context.exception.section_id, 1)
        self.assertEqual(context.exception.faculty_id, FACULTY_ID)

class TestSectionCatalog(unittest.TestCase):

    def setUp(self):
        self.session = FacultySession(faculty_id=FACULTY_ID, token='t', base_url='http://portal.test')
        self.client = SectionsClient([
            make_section(1, 'A1', 10, 'Programming Fundamentals', FACULTY_ID),
            make_section(2, 'B1', 11, 'Calculus', 99),
            shared_section(),
            make_section(4, 'A2', 12, 'Discrete Mathematics', FACULTY_ID),
        ])
        self.catalog = SectionCatalog(self.client, self.session, debounce_seconds=0.05)

    def tearDown(self):
        self.catalog.cancel_search()

    def test_default_debounce_from_config(self):
        catalog = SectionCatalog(self.client, self.session)
        self.assertEqual(catalog.debounce_seconds, Config.SEARCH_DEBOUNCE_SECONDS)

    def test_teaching_sections_for_session_faculty(self):
        """Sections without a mapping for the faculty are left out"""
        sections = self.catalog.list_teaching_sections()

        self.assertEqual(
            [(item.section.name, item.course.name) for item in sections],
            [('A1', 'Programming Fundamentals'), ('C2', 'Data Structures'), ('A2', 'Discrete Mathematics')]
        )
        self.assertEqual(sections[1].scope(FACULTY_ID).course_id, 31)
        self.assertEqual(self.catalog.course_for(4).name, 'Discrete Mathematics')
        with self.assertRaises(CourseNotMappedError):
            self.catalog.course_for(2)

        # Cached after the first load
        self.catalog.list_teaching_sections()
        self.assertEqual(self.client.calls, 1)

    def test_filter(self):
        self.catalog.load()

        self.assertEqual([item.section.name for item in self.catalog.filter('a')], ['A1', 'C2', 'A2'])
        self.assertEqual([item.section.name for item in self.catalog.filter('  DISCRETE ')], ['A2'])
        self.assertEqual([item.section.name for item in self.catalog.filter('c2')], ['C2'])
        self.assertEqual(self.catalog.filter('zzz'), [])
        self.assertEqual(len(self.catalog.filter('')), 3)

    def test_load_failure_is_retryable_empty_state(self):
        self.client.error = NetworkError()

        self.assertFalse(self.catalog.load())
        self.assertEqual(self.catalog.sections, [])
        self.assertEqual(self.catalog.error, 'Failed to fetch your sections. Please try again.')

        self.client.error = None
        self.assertTrue(self.catalog.reload())
        self.assertIsNone(self.catalog.error)
        self.assertEqual(len(self.catalog.sections), 3)

    def test_search_debounced(self):
        """Only the last search within the delay runs"""
        self.catalog.load()
        results = []
        done = threading.Event()

        def callback(items):
            results.append([item.section.name for item in items])
            done.set()

        self.catalog.search('A', callback)
        self.catalog.search('A2', callback)

        self.assertTrue(done.wait(2))
        # give a cancelled timer time to misfire if it were going to
        threading.Event().wait(0.15)
        self.assertEqual(results, [['A2']])

if __name__ == '__main__':
    unittest.main()
