"""
Distinct exam types recorded for a (section, course, faculty) scope
"""

import logging

logger = logging.getLogger(__name__)

class ExamTypeRegistry:
    """Holds the exam-type catalog shown for the current scope.

    :meth:`fetch` only talks to the server; :meth:`apply` replaces the
    catalog wholesale. The controller calls them separately so a stale
    response can be dropped in between.
    """

    def __init__(self, client):
        self.client = client
        self.exam_types = []
        self.loaded = False

    def fetch(self, scope):
        labels = self.client.list_exam_types(scope)
        logger.debug("Fetched %d exam types for %s", len(labels), scope)
        return labels

    def apply(self, labels):
        # distinct, first occurrence wins
        self.exam_types = list(dict.fromkeys(labels))
        self.loaded = True

    def list_exam_types(self, scope):
        self.apply(self.fetch(scope))
        return list(self.exam_types)

    def discard(self, label):
        if label in self.exam_types:
            self.exam_types.remove(label)

    def clear(self):
        self.exam_types = []
        self.loaded = False

    def first(self):
        return self.exam_types[0] if self.exam_types else None

    def contains(self, label):
        return label in self.exam_types

    @property
    def is_empty(self):
        return self.loaded and not self.exam_types
