"""
Orchestrates section, exam-type and record state for the marks screen

Every remote call runs on an executor and is tagged with the selection it
was issued for: a section generation and an exam-type generation. When the
user moves on before the response arrives, the response is dropped instead
of overwriting the newer selection.

Operations that reach the network return a ``concurrent.futures.Future``
resolving to ``(success, message)``.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from portal.exam_registry import ExamTypeRegistry
from portal.exceptions import InvalidTransition, PortalError
from portal.forms import BulkMutationForm, ReplaceBatchRequest
from portal.record_store import RecordStore

logger = logging.getLogger(__name__)

STALE_MESSAGE = "Selection changed before the response arrived"

class ControllerState(Enum):
    IDLE = 'idle'
    SECTION_LOADING = 'section_loading'
    SECTION_READY = 'section_ready'
    MUTATING = 'mutating'

@dataclass(frozen=True)
class ControllerView:
    """Consistent snapshot of everything the marks screen renders."""
    state: ControllerState
    section_name: Optional[str]
    course_name: Optional[str]
    exam_types: Tuple[str, ...]
    selected_exam_type: Optional[str]
    rows: tuple
    form_open: bool
    error: Optional[str]

def _log_notification(level, message):
    logger.log(logging.ERROR if level == 'error' else logging.INFO, message)

def _resolved(result):
    future = Future()
    future.set_result(result)
    return future

class ConsistencyController:

    def __init__(self, session, client, executor=None, notify=None):
        self.session = session
        self.client = client
        self.registry = ExamTypeRegistry(client)
        self.records = RecordStore(client)
        self.notify = notify or _log_notification
        self._owns_executor = executor is None
        self.executor = executor or ThreadPoolExecutor(max_workers=4, thread_name_prefix='marks-portal')
        self._lock = threading.RLock()
        self._section_generation = 0
        self._exam_generation = 0
        self.state = ControllerState.IDLE
        self.section = None
        self.scope = None
        self.students = []
        self.form = None
        self.last_error = None

    # generations

    def _token(self):
        return self._section_generation, self._exam_generation

    def _section_current(self, token):
        return token[0] == self._section_generation

    def _is_current(self, token):
        return token == self._token()

    def _fail(self, error, token=None):
        """Record and surface a remote failure; state is otherwise left alone."""
        message = error.message if isinstance(error, PortalError) else str(error)
        with self._lock:
            if token is None or self._section_current(token):
                self.last_error = message
        logger.warning("Marks portal request failed: %s", message)
        self.notify('error', message)
        return False, message

    # section selection

    def select_section(self, teaching_section):
        with self._lock:
            self._section_generation += 1
            self._exam_generation += 1
            self._reset_section_state()
            self.section = teaching_section
            self.scope = teaching_section.scope(self.session.faculty_id)
            self.state = ControllerState.SECTION_LOADING
            token, scope = self._token(), self.scope
        logger.info("Section %s selected", teaching_section.section.name)
        return self.executor.submit(self._load_section, token, scope)

    def refresh(self):
        """Re-run the section load, e.g. after a failed fetch."""
        if self.section is None:
            raise InvalidTransition("Select a section first")
        return self.select_section(self.section)

    def deselect_section(self):
        with self._lock:
            self._section_generation += 1
            self._exam_generation += 1
            self._reset_section_state()
            self.state = ControllerState.IDLE

    def _reset_section_state(self):
        self.section = None
        self.scope = None
        self.students = []
        self.form = None
        self.last_error = None
        self.registry.clear()
        self.records.clear()

    def _load_section(self, token, scope):
        try:
            students = self.client.list_section_students(scope.section_id)
            exam_types = self.registry.fetch(scope)
        except PortalError as e:
            with self._lock:
                if not self._section_current(token):
                    logger.debug("Dropping stale section failure for section %s: %s", scope.section_id, e.message)
                    return False, STALE_MESSAGE
                self.state = ControllerState.SECTION_READY
            return self._fail(e, token)

        with self._lock:
            if not self._section_current(token):
                logger.debug("Dropping stale section load for section %s", scope.section_id)
                return False, STALE_MESSAGE
            self.students = students
            self.registry.apply(exam_types)
            self.state = ControllerState.SECTION_READY
            first = self.registry.first()
            if first is None:
                return True, "No assessments recorded yet"
            if not self._is_current(token):
                # an exam type was picked by hand while the registry loaded
                return True, "Exam types loaded"
            # auto-advance once per section selection
            self._exam_generation += 1
            token = self._token()
            self.records.select(first)

        return self._load_rows(token, scope, first)

    # exam type selection

    def select_exam_type(self, exam_type):
        with self._lock:
            if self.scope is None:
                raise InvalidTransition("Select a section first")
            self._exam_generation += 1
            self.records.select(exam_type)
            token, scope = self._token(), self.scope
        return self.executor.submit(self._load_rows, token, scope, exam_type)

    def _load_rows(self, token, scope, exam_type):
        try:
            rows = self.records.fetch(scope, exam_type)
        except PortalError as e:
            with self._lock:
                stale = not self._is_current(token)
            if stale:
                logger.debug("Dropping stale failure for %s: %s", exam_type, e.message)
                return False, STALE_MESSAGE
            return self._fail(e, token)

        with self._lock:
            if not self._is_current(token):
                logger.debug("Dropping stale rows for %s", exam_type)
                return False, STALE_MESSAGE
            self.records.load(exam_type, rows)
        return True, f"Loaded {len(rows)} records"

    # form

    def open_create_form(self):
        with self._lock:
            if self.state is not ControllerState.SECTION_READY:
                raise InvalidTransition("Section is not ready")
            self.form = BulkMutationForm.for_create(self.scope, self.students, self.registry.exam_types)
            return self.form

    def open_edit_form(self):
        with self._lock:
            if self.state is not ControllerState.SECTION_READY or not self.records.rows:
                raise InvalidTransition("No marks data available to edit.")
            self.form = BulkMutationForm.for_edit(self.scope, self.records.rows)
            return self.form

    def close_form(self):
        with self._lock:
            self.form = None

    def submit_form(self):
        with self._lock:
            form = self.form
            if form is None:
                raise InvalidTransition("No marks form is open")
            if self.state is ControllerState.MUTATING:
                return _resolved((False, "Please wait for the current save to finish"))
            if not form.validate():
                return _resolved((False, form.first_error()))
            request = form.build_request()
            form.error_message = None
            self.state = ControllerState.MUTATING
            section_generation = self._section_generation
        return self.executor.submit(self._run_submit, form, request, section_generation)

    def _run_submit(self, form, request, section_generation):
        replacing = isinstance(request, ReplaceBatchRequest)
        try:
            if replacing:
                self.client.bulk_update(request)
            else:
                self.client.bulk_add(request)
        except PortalError as e:
            with self._lock:
                if self._section_generation == section_generation:
                    self.state = ControllerState.SECTION_READY
                # the form stays open with the user's edits
                form.error_message = e.message
            return self._fail(e, (section_generation, None))

        message = "Marks updated successfully." if replacing else "Marks added successfully."
        logger.info("%s (%s)", message, request.fields.exam_type)
        with self._lock:
            if self._section_generation != section_generation:
                return True, message
            if self.form is form:
                self.form = None
        self.notify('success', message)
        self._refresh_after_write(section_generation, request.scope, request.fields.exam_type)
        return True, message

    def _refresh_after_write(self, section_generation, scope, exam_type):
        try:
            labels = self.registry.fetch(scope)
        except PortalError as e:
            with self._lock:
                if self._section_generation == section_generation:
                    self.state = ControllerState.SECTION_READY
            self._fail(e, (section_generation, None))
            return

        with self._lock:
            if self._section_generation != section_generation:
                return
            self.registry.apply(labels)
            if self.records.selected_exam_type != exam_type:
                self._exam_generation += 1
                self.records.select(exam_type)
            token = self._token()

        self._load_rows(token, scope, exam_type)
        with self._lock:
            if self._section_generation == section_generation:
                self.state = ControllerState.SECTION_READY

    # delete

    def delete_exam_type(self, exam_type):
        with self._lock:
            if self.scope is None:
                raise InvalidTransition("Select a section first")
            if self.state is ControllerState.MUTATING:
                return _resolved((False, "Please wait for the current save to finish"))
            self.state = ControllerState.MUTATING
            section_generation, scope = self._section_generation, self.scope
        return self.executor.submit(self._run_delete, section_generation, scope, exam_type)

    def _run_delete(self, section_generation, scope, exam_type):
        try:
            self.client.delete_exam_type(scope, exam_type)
        except PortalError as e:
            with self._lock:
                if self._section_generation == section_generation:
                    self.state = ControllerState.SECTION_READY
            return self._fail(e, (section_generation, None))

        message = "Marks deleted successfully."
        logger.info("%s (%s)", message, exam_type)
        with self._lock:
            if self._section_generation == section_generation:
                self._discard_exam_type(exam_type)
        self.notify('success', message)

        try:
            labels = self.registry.fetch(scope)
        except PortalError as e:
            with self._lock:
                if self._section_generation == section_generation:
                    # a catalog that may still list the deleted type is not shown
                    self.registry.clear()
                    self.state = ControllerState.SECTION_READY
            self._fail(e, (section_generation, None))
            return True, message

        with self._lock:
            if self._section_generation == section_generation:
                self.registry.apply(labels)
                self.state = ControllerState.SECTION_READY
        return True, message

    def _discard_exam_type(self, exam_type):
        self.registry.discard(exam_type)
        if self.records.selected_exam_type == exam_type:
            self._exam_generation += 1
            self.records.clear()
        if self.form is not None and self.form.is_edit and self.form.exam_type == exam_type:
            self.form = None

    # read side

    def snapshot(self):
        with self._lock:
            return ControllerView(
                state=self.state,
                section_name=self.section.section.name if self.section else None,
                course_name=self.section.course.name if self.section else None,
                exam_types=tuple(self.registry.exam_types),
                selected_exam_type=self.records.selected_exam_type,
                rows=tuple(self.records.rows),
                form_open=self.form is not None,
                error=self.last_error,
            )

    def close(self):
        if self._owns_executor:
            self.executor.shutdown(wait=True)
