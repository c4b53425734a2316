import copy
import logging

import pytest

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
from candidate_intake.tests.test_fixtures.candidate_fixtures import (
    build_complete_payload,
    build_minimal_payload,
)
from candidate_intake.validators.candidate_validator import (
    validate_candidate_data,
    validate_cv,
    validate_date,
    validate_name,
)


class TestAcceptedPayloads:

    def test_complete_payload_passes(self, complete_payload):
        """
        Behavior:
            - One education, one work experience and a CV entry, all valid.
        Importance:
            - The happy path touches every rule in the pipeline.
        """
        assert validate_candidate_data(complete_payload) is None

    def test_minimal_payload_passes(self):
        payload = {"firstName": "Ana", "lastName": "García", "email": "ana.garcia@example.com"}
        validate_candidate_data(payload)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"cv": None},
            {"educations": None},
            {"workExperiences": None},
            {"address": None},
            {"phone": None},
            {"educations": []},
            {"workExperiences": []},
            {"cv": {}},
        ],
    )
    def test_null_and_empty_optionals_read_as_not_provided(self, overrides):
        validate_candidate_data(build_complete_payload(**overrides))

    def test_missing_and_null_optionals_behave_the_same(self):
        omitted = build_minimal_payload(email="same@example.com")
        nulled = build_minimal_payload(
            email="same@example.com", phone=None, address=None, educations=None, workExperiences=None, cv=None
        )
        validate_candidate_data(omitted)
        validate_candidate_data(nulled)

    def test_validation_does_not_mutate_payload(self, complete_payload):
        before = copy.deepcopy(complete_payload)
        validate_candidate_data(complete_payload)
        assert complete_payload == before

    def test_repeated_validation_gives_same_outcome(self):
        valid = build_minimal_payload()
        invalid = build_minimal_payload(email="nope")

        validate_candidate_data(valid)
        validate_candidate_data(valid)

        for _ in range(2):
            with pytest.raises(InvalidEmailError):
                validate_candidate_data(invalid)


class TestNames:

    @pytest.mark.parametrize("name", ["", "A", "A" * 101])
    @pytest.mark.parametrize("field", ["firstName", "lastName"])
    def test_length_out_of_range(self, field, name):
        with pytest.raises(InvalidNameError) as exc_info:
            validate_candidate_data(build_minimal_payload(**{field: name}))
        assert exc_info.value.field == field
        assert str(exc_info.value) == "Invalid name"

    @pytest.mark.parametrize("name", ["Al", "A" * 100, "José María", "Ñúñez-Ölçer", "Anne-Marie"])
    def test_boundaries_and_accented_letters_pass(self, name):
        validate_name(name, "firstName")

    @pytest.mark.parametrize("name", ["Ana3", "Ana_Maria", "O'Brien", "Ana×B", None, 42])
    def test_bad_characters_or_types(self, name):
        with pytest.raises(InvalidNameError):
            validate_name(name)

    @pytest.mark.parametrize("field", ["firstName", "lastName"])
    def test_missing_name(self, field):
        payload = build_minimal_payload()
        del payload[field]
        with pytest.raises(InvalidNameError):
            validate_candidate_data(payload)


class TestEmail:

    @pytest.mark.parametrize("email", ["invalid-email", "ana@example", "ana@example.c", "@example.com", "", None])
    def test_invalid(self, email):
        with pytest.raises(InvalidEmailError) as exc_info:
            validate_candidate_data(build_minimal_payload(email=email))
        assert str(exc_info.value) == "Invalid email"

    @pytest.mark.parametrize("email", ["ana.garcia@example.com", "a+b%c@sub.example.co.uk"])
    def test_valid(self, email):
        validate_candidate_data(build_minimal_payload(email=email))


class TestPhoneAndAddress:

    @pytest.mark.parametrize("phone", ["612345678", "712345678", "912345678"])
    def test_valid_phones(self, phone):
        validate_candidate_data(build_minimal_payload(phone=phone))

    @pytest.mark.parametrize("phone", ["512345678", "61234567", "6123456789", "61234567a", "+34612345678", 612345678])
    def test_invalid_phones(self, phone):
        with pytest.raises(InvalidPhoneError) as exc_info:
            validate_candidate_data(build_minimal_payload(phone=phone))
        assert str(exc_info.value) == "Invalid phone"

    def test_address_at_limit_passes(self):
        validate_candidate_data(build_minimal_payload(address="x" * 100))

    def test_address_too_long(self):
        with pytest.raises(InvalidAddressError) as exc_info:
            validate_candidate_data(build_minimal_payload(address="x" * 101))
        assert str(exc_info.value) == "Invalid address"

    def test_address_checked_before_phone(self):
        with pytest.raises(InvalidAddressError):
            validate_candidate_data(build_minimal_payload(address="x" * 101, phone="123"))


class TestDates:

    @pytest.mark.parametrize("value", ["2022/01/15", "15-01-2022", "2022-1-15", "June 30, 2024", "2022-01-15T00:00", ""])
    def test_pattern_rejects_other_formats(self, value):
        with pytest.raises(InvalidDateError):
            validate_date(value, "educations[0].startDate")

    def test_education_start_date(self, make_payload):
        payload = make_payload(
            educations=[{"institution": "UCM", "title": "Grado", "startDate": "2022/01/15"}]
        )
        with pytest.raises(InvalidDateError) as exc_info:
            validate_candidate_data(payload)
        assert exc_info.value.field == "educations[0].startDate"

    def test_education_end_date_uses_same_kind(self, make_payload):
        payload = make_payload(
            educations=[{"institution": "UCM", "title": "Grado", "startDate": "2015-09-01", "endDate": "2019/06/30"}]
        )
        with pytest.raises(InvalidDateError) as exc_info:
            validate_candidate_data(payload)
        assert type(exc_info.value) is InvalidDateError

    def test_missing_end_date_means_ongoing(self, make_payload):
        payload = make_payload(
            workExperiences=[{"company": "Acme", "position": "Dev", "startDate": "2020-01-01"}]
        )
        validate_candidate_data(payload)

    def test_work_experience_start_date(self, make_payload):
        payload = make_payload(
            workExperiences=[{"company": "Acme", "position": "Dev", "startDate": "01-01-2020"}]
        )
        with pytest.raises(InvalidDateError) as exc_info:
            validate_candidate_data(payload)
        assert type(exc_info.value) is InvalidDateError

    def test_work_experience_end_date_has_own_kind(self, make_payload):
        payload = make_payload(
            workExperiences=[
                {"company": "Acme", "position": "Dev", "startDate": "2020-01-01", "endDate": "June 30, 2024"}
            ]
        )
        with pytest.raises(InvalidEndDateError) as exc_info:
            validate_candidate_data(payload)
        assert str(exc_info.value) == "Invalid end date"
        assert exc_info.value.field == "workExperiences[0].endDate"

    def test_second_entry_reports_its_index(self, make_payload):
        payload = make_payload(
            educations=[
                {"institution": "A", "title": "T", "startDate": "2010-09-01"},
                {"institution": "B", "title": "T", "startDate": "bad"},
            ]
        )
        with pytest.raises(InvalidDateError) as exc_info:
            validate_candidate_data(payload)
        assert exc_info.value.field == "educations[1].startDate"


class TestCV:

    def test_null_file_path(self, make_payload):
        with pytest.raises(InvalidCVError) as exc_info:
            validate_candidate_data(make_payload(cv={"filePath": None, "fileType": "application/pdf"}))
        assert str(exc_info.value) == "Invalid CV data"
        assert exc_info.value.field == "cv.filePath"

    def test_non_string_file_type(self):
        with pytest.raises(InvalidCVError):
            validate_cv({"filePath": "cv.pdf", "fileType": 3})

    def test_missing_key_alone_is_not_a_failure(self):
        validate_cv({"fileType": "application/pdf"})
        validate_cv({"filePath": "cv.pdf"})

    def test_cv_must_be_a_mapping(self, make_payload):
        with pytest.raises(InvalidCVError):
            validate_candidate_data(make_payload(cv="cv.pdf"))


class TestOrderingAndBypass:

    def test_first_failing_check_wins(self):
        """
        Behavior:
            - firstName and email are both invalid.
        Importance:
            - Fail-fast: only the first rule in order is reported.
        """
        payload = {"firstName": "", "lastName": "López", "email": "invalid-email"}
        with pytest.raises(InvalidNameError):
            validate_candidate_data(payload)

    def test_email_checked_before_dates(self, make_payload):
        payload = make_payload(
            email="bad", educations=[{"institution": "A", "title": "T", "startDate": "bad"}]
        )
        with pytest.raises(InvalidEmailError):
            validate_candidate_data(payload)

    @pytest.mark.parametrize("candidate_id", [1, "abc", 0])
    def test_id_skips_every_rule(self, candidate_id):
        payload = {"id": candidate_id, "firstName": "", "email": "not-an-email", "phone": "1"}
        validate_candidate_data(payload)

    def test_null_id_does_not_skip(self):
        with pytest.raises(InvalidNameError):
            validate_candidate_data({"id": None, "firstName": ""})

    def test_non_mapping_payload(self):
        with pytest.raises(InvalidNameError):
            validate_candidate_data(["Ana"])

    def test_rejection_is_logged(self, caplog):
        with caplog.at_level(logging.INFO, logger="candidate_intake.validators"):
            with pytest.raises(CandidateValidationError):
                validate_candidate_data(build_minimal_payload(phone="000"))

        records = [r for r in caplog.records if r.getMessage() == "validator.rejected"]
        assert records
        assert records[0].kind == "InvalidPhoneError"
        assert records[0].fields == ["phone"]
