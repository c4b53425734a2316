"""
Candidate insertion service.

    payload -> validate_candidate_data() -> repository write -> translated storage errors

Validation errors propagate as raised by the validator. Storage errors arrive
already translated by the repository (storage_error_handler): a
CandidateStorageError for the classified cases, the original exception for
everything else. Nothing is retried.
"""
import logging
from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from candidate_intake.models import Candidate
from candidate_intake.repositories import CandidateRepository
from candidate_intake.validators.candidate_validator import validate_candidate_data
from candidate_intake.validators.optional_field import optional

logger = logging.getLogger(__name__)


async def add_candidate(db: AsyncSession, payload: Mapping[str, Any]) -> Candidate:
    """
    Validate and persist a candidate.

    A payload with an `id` updates that candidate instead of creating one
    (and, as everywhere in this package, skips validation).

    Raises:
        CandidateValidationError: the payload broke a validation rule
        DuplicateEmailError / RecordNotFoundError / ConnectionFailureError
        any other storage error, unchanged
    """
    validate_candidate_data(payload)

    repository = CandidateRepository(db)
    candidate_id = optional(payload, "id")

    if candidate_id:
        logger.info("candidate_service.update", extra={"candidate_id": candidate_id.value})
        return await repository.update_candidate(candidate_id.value, payload)

    candidate = await repository.create_candidate(payload)
    logger.info("candidate_service.created", extra={"candidate_id": candidate.id})
    return candidate
