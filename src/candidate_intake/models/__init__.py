r"""
Centralized access to the candidate schema models.

Importing this package registers every model with Base.metadata, which is
what `Base.metadata.create_all()` needs in tests.

    from candidate_intake.models import Candidate, Education, WorkExperience, Resume
"""

from .candidate import Candidate
from .education import Education
from .work_experience import WorkExperience
from .resume import Resume

__all__ = [
    "Candidate",
    "Education",
    "WorkExperience",
    "Resume",
]
