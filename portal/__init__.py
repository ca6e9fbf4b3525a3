"""
Faculty portal client: section catalog, exam-type registry, record table
and bulk marks form kept consistent by one controller
"""

from .api_client import RemoteResourceClient, login
from .controller import ConsistencyController, ControllerState, ControllerView
from .exam_registry import ExamTypeRegistry
from .exceptions import (
    GENERIC_ERROR_MESSAGE, PortalError, NetworkError, ServerError, CourseNotMappedError, InvalidTransition
)
from .forms import BulkMutationForm, BatchFields, CreateBatchRequest, ReplaceBatchRequest, FormMode
from .record_store import RecordStore, SelectionState
from .section_catalog import CourseLookup, SectionCatalog
from .session import FacultySession
from .types import (
    Scope, StudentRef, CourseRef, CourseFacultyMapping, Section, TeachingSection, ExamRecord,
    ResultStatus, derive_status
)

__all__ = [
    'RemoteResourceClient', 'login', 'ConsistencyController', 'ControllerState', 'ControllerView',
    'ExamTypeRegistry', 'GENERIC_ERROR_MESSAGE', 'PortalError', 'NetworkError', 'ServerError',
    'CourseNotMappedError', 'InvalidTransition', 'BulkMutationForm', 'BatchFields',
    'CreateBatchRequest', 'ReplaceBatchRequest', 'FormMode', 'RecordStore', 'SelectionState',
    'CourseLookup', 'SectionCatalog', 'FacultySession', 'Scope', 'StudentRef', 'CourseRef',
    'CourseFacultyMapping', 'Section', 'TeachingSection', 'ExamRecord', 'ResultStatus', 'derive_status'
]
