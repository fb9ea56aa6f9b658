import uuid
from datetime import datetime

import pytest

from app.models.submission import SubmissionStatus
from app.models.uploaded_file import FileType
from app.services.submissions import (
    build_storage_key,
    build_submission,
    classify_file,
    file_extension,
    first_value,
)

COLUMNS = ["email", "order_number", "full_name", "vin", "make", "model", "year", "color"]


def _columns(submission):
    return {column: getattr(submission, column) for column in COLUMNS}


def test_first_value_picks_first_element_of_a_list():
    assert first_value(["a", "b"]) == "a"
    assert first_value("a") == "a"
    assert first_value([]) is None
    assert first_value(None) is None


def test_list_and_scalar_fields_build_the_same_record():
    scalar = build_submission({"email": "a@b.com", "orderNumber": "42", "vin": "1FA6P8CF"})
    listed = build_submission({"email": ["a@b.com"], "orderNumber": ["42"], "vin": ["1FA6P8CF"]})

    assert _columns(scalar) == _columns(listed)


def test_build_submission_maps_form_names_to_columns():
    submission = build_submission({
        "email": "a@b.com",
        "orderNumber": "A-100",
        "fullName": "Jane Roe",
        "vin": "1FA6P8CF",
        "make": "Ford",
        "model": "Mustang",
        "year": "2019",
        "color": "Red",
    })

    assert _columns(submission) == {
        "email": "a@b.com",
        "order_number": "A-100",
        "full_name": "Jane Roe",
        "vin": "1FA6P8CF",
        "make": "Ford",
        "model": "Mustang",
        "year": "2019",
        "color": "Red",
    }


def test_absent_fields_are_left_empty_not_rejected():
    submission = build_submission({"make": "Ford"})

    assert submission.make == "Ford"
    assert submission.email is None
    assert submission.vin is None


def test_build_submission_assigns_fresh_id_timestamp_and_status():
    first = build_submission({})
    second = build_submission({})

    assert first.id != second.id
    assert uuid.UUID(first.id).version == 4
    assert datetime.fromisoformat(first.created_at).utcoffset().total_seconds() == 0
    assert first.status == SubmissionStatus.PENDING


def test_pending_is_the_only_status_written():
    assert [status.value for status in SubmissionStatus] == ["pending"]


@pytest.mark.parametrize("field_name, expected", [
    ("photo1", FileType.PHOTO),
    ("front_photo", FileType.PHOTO),
    ("Photo1", FileType.DOCUMENT),
    ("registration", FileType.DOCUMENT),
])
def test_classify_file_is_case_sensitive_substring_match(field_name, expected):
    assert classify_file(field_name) == expected


def test_storage_key_uses_field_index_and_extension():
    assert build_storage_key("abc", "photo1", 1, "car.front.JPG") == "abc/photo1_1.JPG"


def test_storage_key_without_extension_has_no_suffix():
    assert file_extension("README") == ""
    assert file_extension("trailing.") == ""
    assert build_storage_key("abc", "docs", 2, "README") == "abc/docs_2"
