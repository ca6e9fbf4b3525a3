"""
Exceptions raised by the faculty portal client
"""

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."

class PortalError(Exception):
    """Base class for failures the portal surfaces to the user"""

    def __init__(self, message=None):
        self.message = message or GENERIC_ERROR_MESSAGE
        super().__init__(self.message)

class NetworkError(PortalError):
    """The request never produced an HTTP response"""
    pass

class ServerError(PortalError):
    """The backend answered with a non-2xx status"""

    def __init__(self, status_code, message=None):
        self.status_code = status_code
        super().__init__(message)

    def __str__(self):
        return f"{self.status_code}: {self.message}"

class CourseNotMappedError(LookupError):
    """The faculty has no course mapping in the section"""

    def __init__(self, section_id, faculty_id):
        self.section_id = section_id
        self.faculty_id = faculty_id
        super().__init__(f"Faculty {faculty_id} does not teach a course in section {section_id}")

class InvalidTransition(RuntimeError):
    """An operation was requested in a state that does not allow it"""
    pass
