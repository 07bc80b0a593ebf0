import json
import pytest
from services.submission_parser_service import (
    SubmissionParserService,
    SubmissionValidationError,
    INVALID_JSON,
    MISSING_FIELDS,
    INVALID_SUBMISSION,
)


def test_parse_preparsed_dict(ana_payload, ana_submission):
    assert SubmissionParserService.parse(ana_payload) == ana_submission


def test_parse_raw_bytes_and_string(ana_payload, ana_submission):
    raw = json.dumps(ana_payload)
    assert SubmissionParserService.parse(raw) == ana_submission
    assert SubmissionParserService.parse(raw.encode("utf-8")) == ana_submission


def test_parse_double_encoded_string(ana_payload, ana_submission):
    double_encoded = json.dumps(json.dumps(ana_payload))
    assert SubmissionParserService.parse(double_encoded) == ana_submission


@pytest.mark.parametrize("body", ["not json", b"", b"\xff\xfe", "{\"studentName\": "])
def test_invalid_json(body):
    with pytest.raises(SubmissionValidationError) as exc_info:
        SubmissionParserService.parse(body)
    assert exc_info.value.error == INVALID_JSON
    assert exc_info.value.status_code == 400


@pytest.mark.parametrize("data", [
    {},
    [],
    {"studentName": "Ana"},
    {"questions": []},
    {"studentName": "", "questions": []},
    {"studentName": "Ana", "questions": None},
])
def test_missing_required_fields(data):
    with pytest.raises(SubmissionValidationError) as exc_info:
        SubmissionParserService.parse(data)
    assert exc_info.value.error == MISSING_FIELDS


def test_empty_question_list_is_valid():
    submission = SubmissionParserService.parse({"studentName": "Ana", "questions": []})
    assert submission.questions == []
    assert submission.time_spent == 0
    assert submission.time_left == 0
    assert submission.leave_count == 0


def test_null_numbers_default_to_zero():
    submission = SubmissionParserService.parse(
        {"studentName": "Ana", "questions": [], "timeLeft": None, "leaveCount": None}
    )
    assert submission.time_left == 0
    assert submission.leave_count == 0


def test_null_selected_is_unanswered():
    submission = SubmissionParserService.parse({
        "studentName": "Ana",
        "questions": [{"question": "Q", "options": ["a"], "correct": 0, "selected": None}],
    })
    assert submission.questions[0].selected is None
    assert not submission.questions[0].is_answered


def test_malformed_question_is_rejected_with_details():
    with pytest.raises(SubmissionValidationError) as exc_info:
        SubmissionParserService.parse({
            "studentName": "Ana",
            "questions": [{"question": "Q", "options": "ab", "correct": 0}],
        })
    error = exc_info.value
    assert error.error == INVALID_SUBMISSION
    assert error.status_code == 400
    assert any(detail.startswith("questions.0.options") for detail in error.details)
