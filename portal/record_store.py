"""
Per-student score rows for the selected exam type
"""

import logging
from enum import Enum

from portal.exceptions import InvalidTransition

logger = logging.getLogger(__name__)

class SelectionState(Enum):
    NO_SELECTION = 'no_selection'
    SELECTED = 'selected'
    LOADED = 'loaded'

class RecordStore:
    """NoSelection -> Selected(exam_type) -> Loaded(rows)."""

    def __init__(self, client):
        self.client = client
        self.state = SelectionState.NO_SELECTION
        self.selected_exam_type = None
        self.rows = []

    def select(self, exam_type):
        self.selected_exam_type = exam_type
        self.rows = []
        self.state = SelectionState.SELECTED

    def fetch(self, scope, exam_type):
        return self.client.list_records(scope, exam_type)

    def load(self, exam_type, rows):
        if self.state is SelectionState.NO_SELECTION or exam_type != self.selected_exam_type:
            raise InvalidTransition(f"Rows for {exam_type!r} do not match the selected exam type")
        self.rows = list(rows)
        self.state = SelectionState.LOADED
        logger.debug("Loaded %d rows for %s", len(self.rows), exam_type)

    def list_records(self, scope, exam_type):
        self.select(exam_type)
        self.load(exam_type, self.fetch(scope, exam_type))
        return list(self.rows)

    def clear(self):
        self.selected_exam_type = None
        self.rows = []
        self.state = SelectionState.NO_SELECTION

    @property
    def is_loaded(self):
        return self.state is SelectionState.LOADED
