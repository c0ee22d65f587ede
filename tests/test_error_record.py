"""Tests for flattening exceptions into stored error records."""

from transcript_functions.domain import ErrorRecord
from transcript_functions.domain.models import MAX_CAUSE_DEPTH
from transcript_functions.exceptions import TranscriptionError


class ProviderError(Exception):
    def __init__(self, message, code=None, foo=None):
        self.code = code
        self.foo = foo
        super().__init__(message)


class TestErrorRecord:
    def test_absent_fields_are_omitted(self):
        record = ErrorRecord.from_exception(ProviderError("quota", foo=None))

        stored = record.to_store()

        assert stored == {"kind": "ProviderError", "message": "quota"}
        assert "foo" not in stored
        assert "code" not in stored

    def test_code_is_kept(self):
        record = ErrorRecord.from_exception(ProviderError("quota", code=429))

        assert record.to_store()["code"] == 429

    def test_non_primitive_code_is_dropped(self):
        record = ErrorRecord.from_exception(ProviderError("quota", code=object()))

        assert record.code is None

    def test_cause_chain_from_raise_from(self):
        try:
            try:
                raise ConnectionError("socket closed")
            except ConnectionError as inner:
                raise TranscriptionError("https://a/b.mp3", inner) from inner
        except TranscriptionError as e:
            record = ErrorRecord.from_exception(e)

        stored = record.to_store()
        assert stored["kind"] == "TranscriptionError"
        assert stored["message"] == "Failed to transcribe audio 'https://a/b.mp3'"
        assert "stack" in stored
        assert stored["cause"] == {"kind": "ConnectionError", "message": "socket closed"}

    def test_cause_attribute_is_followed(self):
        error = TranscriptionError("x.mp3", cause=TimeoutError("slow"))

        record = ErrorRecord.from_exception(error)

        assert record.cause.kind == "TimeoutError"
        assert record.stack is None

    def test_cause_chain_is_bounded(self):
        error = ValueError("level 0")
        current = error
        for level in range(1, 20):
            nxt = ValueError(f"level {level}")
            current.__cause__ = nxt
            current = nxt

        record = ErrorRecord.from_exception(error)

        depth = 0
        while record.cause is not None:
            record = record.cause
            depth += 1
        assert depth == MAX_CAUSE_DEPTH

    def test_round_trips_through_store_shape(self):
        record = ErrorRecord(kind="X", message="y", cause=ErrorRecord(kind="Z", message="w"))

        assert ErrorRecord.model_validate(record.to_store()) == record

    def test_reads_name_as_kind(self):
        record = ErrorRecord.model_validate(
            {"name": "Error", "message": "boom", "stack": "at handler"}
        )

        assert record.kind == "Error"
        assert record.to_store() == {
            "kind": "Error",
            "message": "boom",
            "stack": "at handler",
        }

    def test_reads_record_without_kind_or_message(self):
        record = ErrorRecord.model_validate({"code": "unavailable"})

        assert record.kind == "Error"
        assert record.message == ""
        assert record.code == "unavailable"
