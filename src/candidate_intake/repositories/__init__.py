"""
Repository layer.

    from candidate_intake.repositories import CandidateRepository
"""

from .base_repository import BaseRepository
from .candidate_repository import CandidateRepository

__all__ = [
    "BaseRepository",
    "CandidateRepository",
]
