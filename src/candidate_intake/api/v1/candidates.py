from typing import Any

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from candidate_intake.database.session import get_async_session
from candidate_intake.exceptions.translator import storage_error_handler
from candidate_intake.models import Candidate
from candidate_intake.services.candidate_service import add_candidate

router = APIRouter(prefix="/candidates", tags=["candidates"])


def serialize_candidate(candidate: Candidate) -> dict[str, Any]:
    return {
        "id": candidate.id,
        "firstName": candidate.first_name,
        "lastName": candidate.last_name,
        "email": candidate.email,
        "phone": candidate.phone,
        "address": candidate.address,
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_candidate(
    payload: Any = Body(...),
    db: AsyncSession = Depends(get_async_session),
) -> dict[str, Any]:
    # Any JSON body is accepted: validate_candidate_data() is the only gate, so a
    # non-object body gets the same error shape as every other invalid payload.
    candidate = await add_candidate(db, payload)
    async with storage_error_handler(db, "Candidate"):
        await db.commit()
    return serialize_candidate(candidate)
