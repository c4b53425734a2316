"""
Candidate payload validation.

`validate_candidate_data()` runs an ordered pipeline of checks over an untrusted
insertion payload and raises on the first rule that fails. Later checks never run,
so for a given payload exactly one error surfaces, always the same one.

Order:
    1. firstName        -> InvalidNameError
    2. lastName         -> InvalidNameError
    3. email            -> InvalidEmailError
    4. address          -> InvalidAddressError   (only if provided)
    5. phone            -> InvalidPhoneError     (only if provided)
    6. educations[*]    -> InvalidDateError      (start and end dates)
    7. workExperiences  -> InvalidDateError      (start date)
                           InvalidEndDateError   (end date)
    8. cv               -> InvalidCVError        (only if provided and non-empty)

A payload carrying an `id` is an update and skips validation entirely.

The validator never mutates or normalizes the payload; it only accepts or rejects.
"""
import logging
import re
from typing import Any, Callable, Mapping

from candidate_intake.exceptions.base import (
    CandidateValidationError,
    InvalidAddressError,
    InvalidCVError,
    InvalidDateError,
    InvalidEmailError,
    InvalidEndDateError,
    InvalidNameError,
    InvalidPhoneError,
)

from .optional_field import entries, has_key, optional

logger = logging.getLogger(__name__)

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
ADDRESS_MAX_LENGTH = 100

# Letters (accented Latin included), spaces and hyphens. À-Ö / Ø-ö / ø-ÿ skip × and ÷.
NAME_REGEX = re.compile(r"[A-Za-zÀ-ÖØ-öø-ÿ \-]+")
EMAIL_REGEX = re.compile(r"[A-Za-z0-9._%+\-]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}")
PHONE_REGEX = re.compile(r"[679][0-9]{8}")
DATE_REGEX = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def _matches(pattern: re.Pattern, value: Any) -> bool:
    return isinstance(value, str) and pattern.fullmatch(value) is not None


# =================================================================================================================
# Field rules
# =================================================================================================================

def validate_name(name: Any, field: str = "firstName") -> None:
    if (
        not isinstance(name, str)
        or not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH
        or not _matches(NAME_REGEX, name)
    ):
        raise InvalidNameError(field)


def validate_email(email: Any) -> None:
    if not _matches(EMAIL_REGEX, email):
        raise InvalidEmailError("email")


def validate_phone(phone: Any) -> None:
    """Absent phones pass; provided ones must be 9 digits starting with 6, 7 or 9."""
    if phone is None:
        return
    if not _matches(PHONE_REGEX, phone):
        raise InvalidPhoneError("phone")


def validate_address(address: Any) -> None:
    if address is None:
        return
    if not isinstance(address, str) or len(address) > ADDRESS_MAX_LENGTH:
        raise InvalidAddressError("address")


def validate_date(
    value: Any,
    field: str,
    error_cls: type[CandidateValidationError] = InvalidDateError,
) -> None:
    """Literal YYYY-MM-DD only; no other separators or orderings."""
    if not _matches(DATE_REGEX, value):
        raise error_cls(field)


# =================================================================================================================
# Nested entry rules
# =================================================================================================================

def validate_education(education: Mapping[str, Any], index: int = 0) -> None:
    prefix = f"educations[{index}]"
    validate_date(optional(education, "startDate").value, f"{prefix}.startDate")

    end_date = optional(education, "endDate")
    if end_date:
        validate_date(end_date.value, f"{prefix}.endDate")


def validate_experience(experience: Mapping[str, Any], index: int = 0) -> None:
    prefix = f"workExperiences[{index}]"
    validate_date(optional(experience, "startDate").value, f"{prefix}.startDate")

    end_date = optional(experience, "endDate")
    if end_date:
        # Work-experience end dates report their own kind; education end dates do not.
        validate_date(end_date.value, f"{prefix}.endDate", InvalidEndDateError)


def validate_cv(cv: Any) -> None:
    """
    Validate a CV entry.

    An empty mapping is valid (no file attached yet). A key that is present must
    hold a string: explicit nulls and other types fail. A key that is simply
    missing does not fail on its own.
    """
    if not isinstance(cv, Mapping):
        raise InvalidCVError("cv")

    for key in ("filePath", "fileType"):
        if has_key(cv, key) and not isinstance(cv[key], str):
            raise InvalidCVError(f"cv.{key}")


# =================================================================================================================
# Pipeline
# =================================================================================================================

def _check_cv(payload: Mapping[str, Any]) -> None:
    cv = optional(payload, "cv")
    if cv and cv.value != {}:
        validate_cv(cv.value)


def _check_educations(payload: Mapping[str, Any]) -> None:
    for index, education in enumerate(entries(payload, "educations")):
        validate_education(education, index)


def _check_experiences(payload: Mapping[str, Any]) -> None:
    for index, experience in enumerate(entries(payload, "workExperiences")):
        validate_experience(experience, index)


_CHECKS: tuple[Callable[[Mapping[str, Any]], None], ...] = (
    lambda p: validate_name(optional(p, "firstName").value, "firstName"),
    lambda p: validate_name(optional(p, "lastName").value, "lastName"),
    lambda p: validate_email(optional(p, "email").value),
    lambda p: validate_address(optional(p, "address").value),
    lambda p: validate_phone(optional(p, "phone").value),
    _check_educations,
    _check_experiences,
    _check_cv,
)


def validate_candidate_data(payload: Mapping[str, Any]) -> None:
    """
    Validate a candidate insertion payload.

    Args:
        payload: the raw (usually JSON-decoded) candidate mapping.

    Raises:
        CandidateValidationError: the subclass for the first failing rule.
    """
    if optional(payload, "id"):
        # Update path: the payload is passed through unchecked.
        logger.debug("validator.skipped_for_update")
        return

    if not isinstance(payload, Mapping):
        raise InvalidNameError("firstName")

    for check in _CHECKS:
        try:
            check(payload)
        except CandidateValidationError as exc:
            logger.info("validator.rejected", extra={"kind": exc.kind, "fields": exc.fields})
            raise


__all__ = [
    "validate_candidate_data",
    "validate_name",
    "validate_email",
    "validate_phone",
    "validate_address",
    "validate_date",
    "validate_education",
    "validate_experience",
    "validate_cv",
]
