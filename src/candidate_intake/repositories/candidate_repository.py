"""
Candidate repository.

Translates an (already validated) camelCase insertion payload into the ORM
graph: one Candidate with its Education, WorkExperience and Resume children,
written in a single flush.
"""
import logging
from datetime import date
from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from candidate_intake.models import Candidate, Education, Resume, WorkExperience
from candidate_intake.validators.optional_field import entries, optional

from .base_repository import BaseRepository

logger = logging.getLogger(__name__)

# payload key -> Candidate attribute
CANDIDATE_FIELDS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "email": "email",
    "phone": "phone",
    "address": "address",
}


def _parse_date(value: Any) -> date | None:
    return date.fromisoformat(value) if value else None


def _build_education(entry: Mapping[str, Any]) -> Education:
    return Education(
        institution=entry.get("institution"),
        title=entry.get("title"),
        start_date=_parse_date(entry.get("startDate")),
        end_date=_parse_date(entry.get("endDate")),
    )


def _build_work_experience(entry: Mapping[str, Any]) -> WorkExperience:
    return WorkExperience(
        company=entry.get("company"),
        position=entry.get("position"),
        description=entry.get("description"),
        start_date=_parse_date(entry.get("startDate")),
        end_date=_parse_date(entry.get("endDate")),
    )


def _build_resume(cv: Mapping[str, Any]) -> Resume | None:
    # An empty or partial CV means "no file attached yet".
    if not cv.get("filePath") or not cv.get("fileType"):
        return None
    return Resume(file_path=cv["filePath"], file_type=cv["fileType"])


class CandidateRepository(BaseRepository[Candidate]):
    """Repository for Candidate aggregates."""

    def __init__(self, db: AsyncSession):
        super().__init__(Candidate, db)

    async def create_candidate(self, data: Mapping[str, Any]) -> Candidate:
        """
        Create a candidate and its nested entries.

        Args:
            data: a payload that already passed validate_candidate_data()

        Raises:
            DuplicateEmailError: the e-mail is already registered
            ConnectionFailureError: the database could not be reached
        """
        candidate = Candidate(
            **{attr: optional(data, key).value for key, attr in CANDIDATE_FIELDS.items()}
        )
        candidate.educations = [_build_education(e) for e in entries(data, "educations")]
        candidate.work_experiences = [_build_work_experience(w) for w in entries(data, "workExperiences")]

        cv = optional(data, "cv")
        resume = _build_resume(cv.value) if cv else None
        candidate.resumes = [resume] if resume else []

        logger.debug(
            "candidate_repo.create",
            extra={
                "educations": len(candidate.educations),
                "work_experiences": len(candidate.work_experiences),
                "has_resume": resume is not None,
            },
        )
        return await self.add(candidate)

    async def update_candidate(self, candidate_id: int, data: Mapping[str, Any]) -> Candidate:
        """
        Update the scalar fields present in `data` on an existing candidate.

        Raises:
            RecordNotFoundError: no candidate has this id
        """
        changes = {}
        for key, attr in CANDIDATE_FIELDS.items():
            field = optional(data, key)
            if field:
                changes[attr] = field.value
        return await self.update(candidate_id, **changes)

    async def get_by_email(self, email: str) -> Candidate | None:
        return await self.find_by_field("email", email)
