"""
Signed-in faculty context passed explicitly into the portal
"""

from dataclasses import dataclass

@dataclass(frozen=True)
class FacultySession:
    faculty_id: int
    token: str
    base_url: str
    faculty_name: str = ''

    @property
    def auth_header(self):
        return {'Authorization': f'Bearer {self.token}'}
