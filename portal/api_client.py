"""
Authenticated HTTP accessor for the marks API
"""

import logging
from urllib.parse import quote

import requests

from config import Config
from portal.exceptions import NetworkError, ServerError
from portal.session import FacultySession
from portal.types import ExamRecord, Section, StudentRef

logger = logging.getLogger(__name__)

DEFAULT_API_URL = Config.PORTAL_API_URL
DEFAULT_TIMEOUT = Config.PORTAL_REQUEST_TIMEOUT

def _join(base_url, *segments):
    path = '/'.join(quote(str(segment), safe='') for segment in segments)
    return f"{base_url.rstrip('/')}/api/{path}"

def _send(http, method, url, timeout, **kwargs):
    """Perform one request and unwrap the ``data`` member of the body."""
    try:
        response = http.request(method, url, timeout=timeout, **kwargs)
    except requests.RequestException as e:
        logger.warning("%s %s failed: %s", method, url, e)
        raise NetworkError("Unable to reach the server. Check your connection and try again.") from e

    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    if not response.ok:
        logger.warning("%s %s returned %s: %s", method, url, response.status_code, body.get('message'))
        raise ServerError(response.status_code, body.get('message'))

    return body.get('data') or {}

def login(base_url, username, password, http=None, timeout=DEFAULT_TIMEOUT):
    """Exchange credentials for a :class:`FacultySession`.

    ``base_url`` falls back to the configured ``PORTAL_API_URL``.
    """
    base_url = base_url or DEFAULT_API_URL
    http = http or requests.Session()
    data = _send(http, 'POST', _join(base_url, 'auth', 'faculty', 'login'), timeout,
                 json={'username': username, 'password': password})
    faculty = data['faculty']
    return FacultySession(
        faculty_id=faculty['id'],
        token=data['token'],
        base_url=base_url,
        faculty_name=faculty.get('name') or '',
    )

class RemoteResourceClient:
    """Thin wrapper over ``requests.Session`` carrying the faculty's bearer token.

    Transport failures raise :class:`NetworkError`; non-2xx responses raise
    :class:`ServerError` with the body's ``message``.
    """

    def __init__(self, session, http=None, timeout=DEFAULT_TIMEOUT):
        self.session = session
        self.timeout = timeout
        self.http = http or requests.Session()
        self.http.headers.update(session.auth_header)

    def _url(self, *segments):
        return _join(self.session.base_url, *segments)

    def _get(self, *segments):
        return _send(self.http, 'GET', self._url(*segments), self.timeout)

    def list_sections(self, faculty_id):
        data = self._get('faculty', faculty_id, 'sections')
        return [Section.from_json(item) for item in data.get('sections', [])]

    def list_section_students(self, section_id):
        data = self._get('section', section_id, 'students')
        return [StudentRef.from_json(item) for item in data.get('students', [])]

    def list_exam_types(self, scope):
        data = self._get('marks', 'exam-types', scope.section_id,
                         'course', scope.course_id, 'faculty', scope.faculty_id)
        return list(data.get('examTypes', []))

    def list_records(self, scope, exam_type):
        data = self._get('marks', 'section', scope.section_id, 'course', scope.course_id,
                         'faculty', scope.faculty_id, 'exam-type', exam_type)
        return [ExamRecord.from_json(item) for item in data.get('marks', [])]

    def bulk_add(self, request):
        return _send(self.http, 'POST', self._url('marks', 'bulk-add'), self.timeout,
                     json=request.to_payload())

    def bulk_update(self, request):
        return _send(self.http, 'PUT', self._url('marks', 'bulk-update'), self.timeout,
                     json=request.to_payload())

    def delete_exam_type(self, scope, exam_type):
        return _send(self.http, 'DELETE',
                     self._url('marks', 'section', scope.section_id, 'course', scope.course_id,
                               'faculty', scope.faculty_id, 'exam-type', exam_type),
                     self.timeout)

    def close(self):
        self.http.close()
