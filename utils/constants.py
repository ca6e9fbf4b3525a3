"""
Constants shared by the marks API and the portal client
"""

EXAM_TYPES = (
    'Midterm-1', 'Midterm-2', 'Midterm-3',
    'Reattempt-Midterm-1', 'Reattempt-Midterm-2', 'Reattempt-Midterm-3',
    'Final', 'Reattempt-Final',
    'Quiz', 'Reattempt-Quiz',
    'Assignment', 'Reattempt-Assignment',
    'Lab', 'Reattempt-Lab',
    'Final Lab', 'Reattempt-Final-Lab',
    'Observation', 'Attendance',
)

MIN_TOTAL_MARKS = 1
MAX_TOTAL_MARKS = 1000
