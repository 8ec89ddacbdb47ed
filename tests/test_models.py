"""
Tests for core/models.py - job data model and JSON record format.
"""

import json

import pytest
from pydantic import ValidationError

from core.enums import Language
from core.exceptions import ContractViolationException, JobSerializationException
from core.models import Job, JobData


EXAMPLE_TEXT = (
    '{"id":"job-1","description":"demo",'
    '"data":{"content":"echo hi","is_command":1,"lang":0}}'
)


def _valid_node() -> dict:
    return {
        "id": "job-1",
        "description": "demo",
        "data": {"content": "echo hi", "is_command": 1, "lang": 0},
    }


class TestJobData:
    """Test JobData serialization."""

    def test_to_structured_encodes_flag_and_language_as_integers(self):
        data = JobData(content="print(1)", is_command=False, lang=Language.PYTHON)

        node = data.to_structured()

        assert node == {"content": "print(1)", "is_command": 0, "lang": 3}
        assert type(node["is_command"]) is int
        assert type(node["lang"]) is int

    def test_from_structured_builds_equal_instance(self):
        data = JobData(content="puts 1", is_command=False, lang=Language.RUBY)

        assert JobData.from_structured(data.to_structured()) == data

    @pytest.mark.parametrize("flag,expected", [(True, True), (False, False), (1, True), (0, False)])
    def test_from_structured_accepts_boolean_aliases(self, flag, expected):
        data = JobData.from_structured({"content": "ls", "is_command": flag, "lang": 0})

        assert data.is_command is expected

    @pytest.mark.parametrize("missing", ["content", "is_command", "lang"])
    def test_from_structured_rejects_missing_field(self, missing):
        node = {"content": "ls", "is_command": 1, "lang": 0}
        del node[missing]

        with pytest.raises(JobSerializationException, match=f"data.{missing}"):
            JobData.from_structured(node)

    @pytest.mark.parametrize(
        "field,value",
        [
            ("content", 42),
            ("content", None),
            ("is_command", 2),
            ("is_command", "1"),
            ("is_command", 1.0),
            ("lang", "0"),
            ("lang", True),
            ("lang", 99),
            ("lang", -1),
        ],
    )
    def test_from_structured_rejects_wrong_shape(self, field, value):
        node = {"content": "ls", "is_command": 1, "lang": 0}
        node[field] = value

        with pytest.raises(JobSerializationException):
            JobData.from_structured(node)

    def test_from_structured_rejects_non_object(self):
        with pytest.raises(JobSerializationException):
            JobData.from_structured(["ls", 1, 0])

    def test_instances_are_frozen(self):
        data = JobData(content="ls", is_command=True, lang=Language.NONE)

        with pytest.raises(ValidationError):
            data.content = "rm -rf /"


class TestJobSerialization:
    """Test Job to_text / parse."""

    def test_example_record_text(self, command_job):
        assert command_job.to_text() == EXAMPLE_TEXT

    def test_parse_example_record(self, command_job):
        assert Job.parse(EXAMPLE_TEXT) == command_job

    def test_key_order_is_stable(self, script_job):
        node = json.loads(script_job.to_text())

        assert list(node) == ["id", "description", "data"]
        assert list(node["data"]) == ["content", "is_command", "lang"]

    @pytest.mark.parametrize(
        "job_id,description,content,is_command,lang",
        [
            ("job-1", "demo", "echo hi", True, Language.NONE),
            ("", "", "", False, Language.NONE),
            ("build:42", "multi\nline", "#!/bin/bash\nset -e\nmake\n", False, Language.BASH),
            ("ünïcødé", "задача", "print('日本語')", False, Language.PYTHON),
            ("quotes", 'say "hi"', 'echo "a\\b"', True, Language.SHELL),
            ("lua", "tab\there", "print(1)", False, Language.LUA),
            ("ignored-lang", "lang kept for commands", "uptime", True, Language.PERL),
        ],
    )
    def test_round_trip(self, job_id, description, content, is_command, lang):
        job = Job(
            id=job_id,
            description=description,
            data=JobData(content=content, is_command=is_command, lang=lang),
        )

        assert Job.parse(job.to_text()) == job

    def test_non_ascii_is_written_as_utf8(self):
        job = Job.from_command("j", "café", "echo é")

        assert "café" in job.to_text()
        assert Job.parse(job.to_text().encode("utf-8")) == job

    @pytest.mark.parametrize(
        "text",
        ["{}", "not json", "[]", "null", '"job"', "", "[" * 100000 + "]" * 100000],
    )
    def test_parse_rejects_malformed_input(self, text):
        with pytest.raises(JobSerializationException):
            Job.parse(text)

    @pytest.mark.parametrize("missing", ["id", "description", "data"])
    def test_parse_rejects_missing_top_level_field(self, missing):
        node = _valid_node()
        del node[missing]

        with pytest.raises(JobSerializationException, match=missing):
            Job.parse(json.dumps(node))

    def test_parse_rejects_missing_nested_field(self):
        node = _valid_node()
        del node["data"]["content"]

        with pytest.raises(JobSerializationException, match="data.content"):
            Job.parse(json.dumps(node))

    @pytest.mark.parametrize(
        "field,value", [("id", 1), ("description", None), ("data", "echo hi")]
    )
    def test_parse_rejects_wrong_top_level_type(self, field, value):
        node = _valid_node()
        node[field] = value

        with pytest.raises(JobSerializationException):
            Job.parse(json.dumps(node))

    def test_parse_rejects_invalid_utf8(self):
        with pytest.raises(JobSerializationException):
            Job.parse(b'{"id": "\xff"}')

    @pytest.mark.parametrize("encoding", ["utf-16", "utf-32"])
    def test_parse_rejects_non_utf8_encodings(self, encoding):
        with pytest.raises(JobSerializationException, match="UTF-8"):
            Job.parse(EXAMPLE_TEXT.encode(encoding))

    def test_parse_accepts_utf8_bytes(self, command_job):
        assert Job.parse(EXAMPLE_TEXT.encode("utf-8")) == command_job

    def test_parse_none_is_contract_violation(self):
        with pytest.raises(ContractViolationException):
            Job.parse(None)


class TestJobConstruction:
    """Test Job factories and ownership."""

    def test_data_is_taken_as_is(self):
        data = JobData(content="ls", is_command=True, lang=Language.NONE)

        job = Job(id="a", description="b", data=data)

        assert job.data is data

    def test_from_command(self):
        job = Job.from_command("cmd", "list", "ls -la")

        assert job.data == JobData(content="ls -la", is_command=True, lang=Language.NONE)

    def test_from_script(self):
        job = Job.from_script("scr", "hello", "console.log(1)", Language.JAVASCRIPT)

        assert job.data.is_command is False
        assert job.data.lang is Language.JAVASCRIPT
        assert job.to_structured()["data"]["lang"] == 6

    def test_language_accepts_integer_code(self):
        data = JobData(content="x", is_command=False, lang=4)

        assert data.lang is Language.PERL

    def test_jobs_are_frozen(self, command_job):
        with pytest.raises(ValidationError):
            command_job.id = "other"
