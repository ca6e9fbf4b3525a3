"""
Sections the signed-in faculty teaches, and the course taught in each
"""

import logging
import threading

from config import Config
from portal.exceptions import CourseNotMappedError, PortalError
from portal.types import TeachingSection

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = Config.SEARCH_DEBOUNCE_SECONDS

class CourseLookup:
    """(section_id, faculty_id) -> CourseRef, built once per catalog load."""

    def __init__(self, table=None):
        self._table = dict(table or {})

    @classmethod
    def build(cls, sections):
        table = {}
        for section in sections:
            for mapping in section.mappings:
                table.setdefault((section.id, mapping.faculty_id), mapping.course)
        return cls(table)

    def resolve(self, section_id, faculty_id):
        try:
            return self._table[(section_id, faculty_id)]
        except KeyError:
            raise CourseNotMappedError(section_id, faculty_id) from None

    def __contains__(self, key):
        return key in self._table

    def __len__(self):
        return len(self._table)

class SectionCatalog:
    """Loads and filters the faculty's teaching sections.

    A failed load leaves an empty catalog with ``error`` set; call
    :meth:`reload` to retry.
    """

    def __init__(self, client, session, debounce_seconds=DEFAULT_DEBOUNCE_SECONDS):
        self.client = client
        self.session = session
        self.debounce_seconds = debounce_seconds
        self.sections = []
        self.lookup = CourseLookup()
        self.error = None
        self.loaded = False
        self._timer = None
        self._timer_lock = threading.Lock()

    def load(self):
        faculty_id = self.session.faculty_id
        try:
            sections = self.client.list_sections(faculty_id)
        except PortalError as e:
            logger.warning("Could not load sections for faculty %s: %s", faculty_id, e.message)
            self.sections = []
            self.lookup = CourseLookup()
            self.error = "Failed to fetch your sections. Please try again."
            self.loaded = False
            return False

        self.lookup = CourseLookup.build(sections)
        self.sections = [
            TeachingSection(section, self.lookup.resolve(section.id, faculty_id))
            for section in sections
            if (section.id, faculty_id) in self.lookup
        ]
        self.error = None
        self.loaded = True
        logger.debug("Loaded %d teaching sections", len(self.sections))
        return True

    reload = load

    def list_teaching_sections(self):
        if not self.loaded:
            self.load()
        return list(self.sections)

    def course_for(self, section_id):
        """Course the signed-in faculty teaches in a section; raises CourseNotMappedError."""
        return self.lookup.resolve(section_id, self.session.faculty_id)

    def filter(self, term):
        needle = (term or '').strip().lower()
        if not needle:
            return list(self.sections)
        return [
            item for item in self.sections
            if needle in item.section.name.lower() or needle in item.course.name.lower()
        ]

    def search(self, term, callback):
        """Debounced :meth:`filter`; only the last call within the delay fires."""
        timer = threading.Timer(self.debounce_seconds, lambda: callback(self.filter(term)))
        timer.daemon = True
        with self._timer_lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = timer
        timer.start()
        return timer

    def cancel_search(self):
        with self._timer_lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
