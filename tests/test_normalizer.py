"""Tests for skill normalization and record field resolution."""

from datetime import datetime, timezone

import pytest
from hypothesis import given, strategies as st, settings

from talent_pipeline.core.models import ApplicationStatus
from talent_pipeline.jobs.normalizer import (
    NAME_ALIASES,
    candidate_from_record,
    dedup_key,
    evidence_field,
    int_field,
    job_from_record,
    normalize_skills,
    parse_status,
    parse_timestamp,
    resolve_field,
    text_field,
)


class TestNormalizeSkills:
    """Test cases for normalize_skills."""

    def test_comma_separated_string(self):
        assert normalize_skills(" React, Node.js ,, SQL ") == ["react", "node.js", "sql"]

    def test_sequence_keeps_order_and_duplicates(self):
        assert normalize_skills(["Python", " python ", "Go"]) == ["python", "python", "go"]

    def test_sequence_drops_empty_and_non_strings(self):
        assert normalize_skills(["  ", None, 42, "Docker", {"name": "x"}]) == ["docker"]

    @pytest.mark.parametrize("value", [None, 7, 3.5, {"skills": "python"}, True])
    def test_other_values_produce_nothing(self, value):
        assert normalize_skills(value) == []

    def test_commas_inside_list_items_are_kept(self):
        # Only free text is split; list items are taken whole
        assert normalize_skills(["a, b"]) == ["a, b"]

    @given(st.lists(st.text(alphabet=st.characters(max_codepoint=0x17F), max_size=12), max_size=10))
    @settings(max_examples=100, deadline=None)
    def test_tokens_are_trimmed_lowercase_and_non_empty(self, values):
        for source in (values, ",".join(values)):
            for token in normalize_skills(source):
                assert token
                assert token == token.strip()
                assert token == token.lower()


class TestFieldResolution:
    """Test cases for alias-based field lookup."""

    def test_first_present_alias_wins(self):
        record = {"fullName": "Full", "applicantName": "Applicant"}
        assert resolve_field(record, NAME_ALIASES) == "Applicant"

    def test_dotted_alias_walks_nested_records(self):
        record = {"applicant": {"name": "Nested"}}
        assert resolve_field(record, NAME_ALIASES) == "Nested"

    def test_blank_values_fall_through(self):
        record = {"name": "  ", "applicantName": None, "username": "jdoe"}
        assert text_field(record, NAME_ALIASES) == "jdoe"

    def test_non_mapping_records_resolve_to_nothing(self):
        assert resolve_field(["name"], NAME_ALIASES) is None
        assert text_field(None, NAME_ALIASES) == ""

    @pytest.mark.parametrize("value,expected", [
        (5, 5),
        (4.9, 4),
        (" 3 ", 3),
        ("2.5", 2),
        ("five", 0),
        (True, 0),
        ([1], 0),
        ("Infinity", 0),
        ("NaN", 0),
        ("1e999", 0),
        (float("inf"), 0),
        (float("nan"), 0),
    ])
    def test_int_field_defaults_malformed_values(self, value, expected):
        assert int_field({"experienceYears": value}, ("experienceYears",)) == expected

    def test_evidence_joins_every_cv_alias(self):
        record = {"cvDescription": "Python dev", "coverLetter": "Loves SQL", "applicant": {"cv": "Docker"}}
        assert evidence_field(record) == "Python dev\nLoves SQL\nDocker"


class TestRecordParsing:
    """Test cases for job and candidate construction."""

    def test_job_from_record_uses_skill_aliases(self):
        job = job_from_record({"id": "j1", "title": "Backend", "requiredSkills": "Go, Postgres"})

        assert job.id == "j1"
        assert job.skills == ["go", "postgres"]
        assert job.status == "published"

    def test_job_from_record_tolerates_garbage(self):
        job = job_from_record(None)

        assert job.id == ""
        assert job.skills == []

    def test_candidate_from_record(self):
        candidate = candidate_from_record({
            "id": "app-1",
            "applicantName": "Jane Doe",
            "applicantEmail": "jane@x.com",
            "mobile": "555-0100",
            "skills": ["Python", "SQL"],
            "experience": "4",
            "expectedSalary": "not telling",
            "cvDetails": "Built data pipelines",
            "github": "https://github.com/jane",
        })

        assert candidate.id == "app-1"
        assert candidate.name == "Jane Doe"
        assert candidate.email == "jane@x.com"
        assert candidate.phone == "555-0100"
        assert candidate.skills == ["python", "sql"]
        assert candidate.experience_years == 4
        assert candidate.expected_salary == 0
        assert candidate.resume_text == "Built data pipelines"
        assert candidate.github == "https://github.com/jane"

    def test_candidate_without_evidence_has_no_resume_text(self):
        assert candidate_from_record({"name": "X"}).resume_text is None

    def test_non_finite_numbers_are_defaulted(self):
        candidate = candidate_from_record({
            "id": "a1",
            "experienceYears": "Infinity",
            "expectedSalary": float("inf"),
            "createdAt": {"_seconds": 1e20},
        })
        job = job_from_record({"id": "j1", "applicantsCount": float("nan")})

        assert candidate.experience_years == 0
        assert candidate.expected_salary == 0
        assert job.applicants_count == 0

    def test_dedup_key(self):
        assert dedup_key(" A@X.com ", "Jane Doe ") == "a@x.com-jane doe"
        assert dedup_key(None, None) == "-"

    @pytest.mark.parametrize("value,expected", [
        ("hired", ApplicationStatus.HIRED),
        (" Rejected ", ApplicationStatus.REJECTED),
        ("archived", ApplicationStatus.PENDING),
        (None, ApplicationStatus.PENDING),
        (3, ApplicationStatus.PENDING),
    ])
    def test_parse_status(self, value, expected):
        assert parse_status(value) == expected

    def test_parse_timestamp_variants(self):
        expected = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

        assert parse_timestamp("2024-01-02T03:04:05Z") == expected
        assert parse_timestamp(expected.timestamp()) == expected
        assert parse_timestamp(expected.timestamp() * 1000) == expected
        assert parse_timestamp({"_seconds": expected.timestamp()}) == expected
        assert parse_timestamp("yesterday") is None
        assert parse_timestamp({"_seconds": 1e20}) is None
        assert parse_timestamp(10 ** 400) is None
        assert parse_timestamp(float("nan")) is None
        assert parse_timestamp(None) is None
