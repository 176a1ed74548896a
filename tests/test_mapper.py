from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from ecs_log_mapper.mapper import EcsMapper, map_entry_to_ecs
from ecs_log_mapper.mapping.error_expander import extract_stack_trace
from ecs_log_mapper.mapping.time_utils import is_utc
from ecs_log_mapper.models.log_entry import LogEntry, Severity

CEST = timezone(timedelta(hours=2))
LOCAL_TIME = datetime(2024, 5, 1, 14, 30, 45, 123456, tzinfo=CEST)
UTC_STAMP = "2024-05-01T12:30:45.123456Z"


def _entry(message="message", progname=None, pid=None, attributes=None, time=LOCAL_TIME):
    return LogEntry(
        time=time,
        severity=Severity.INFO,
        message=message,
        progname=progname,
        pid=pid,
        attributes=attributes or {},
    )


def _raised(message="boom"):
    try:
        raise RuntimeError(message)
    except RuntimeError as e:
        return e


def test_outputs_fields_in_ecs_format():
    entry = _entry(progname="test", pid=12345, attributes={"foo": "bar", "baz": "boo"})
    data = EcsMapper().entry_as_json(entry)
    assert data == {
        "@timestamp": UTC_STAMP,
        "log": {"level": "INFO"},
        "process": {"name": "test", "pid": 12345},
        "message": "message",
        "foo": "bar",
        "baz": "boo",
    }


def test_empty_attributes_and_missing_process_fields_are_omitted():
    data = EcsMapper().entry_as_json(_entry(pid=12345))
    assert data == {
        "@timestamp": UTC_STAMP,
        "log": {"level": "INFO"},
        "process": {"pid": 12345},
        "message": "message",
    }
    assert set(EcsMapper().entry_as_json(_entry())) == {"@timestamp", "log", "message"}


def test_dot_notated_attributes_become_nested_objects():
    entry = _entry(
        message="test",
        attributes={"http.response.status_code": 200, "http.request.method": "GET"},
    )
    data = EcsMapper().entry_as_json(entry)
    assert data["http"] == {
        "response": {"status_code": 200},
        "request": {"method": "GET"},
    }


def test_blank_attribute_values_are_dropped():
    entry = _entry(attributes={"user.id": "", "tags": [], "labels": {"env": ""}, "ok": 0})
    data = EcsMapper().entry_as_json(entry)
    assert "user" not in data
    assert "tags" not in data
    assert "labels" not in data
    assert data["ok"] == 0


def test_message_exception_expands_error():
    error = _raised()
    data = EcsMapper().entry_as_json(_entry(message=error))
    assert data["message"] == "RuntimeError: boom"
    assert data["error"] == {
        "type": "RuntimeError",
        "message": "boom",
        "stack_trace": extract_stack_trace(error),
    }
    assert data["error"]["stack_trace"][-1].endswith("in _raised")


def test_error_attribute_exception_is_expanded():
    error = _raised()
    data = EcsMapper().entry_as_json(_entry(message="an error occurred", attributes={"error": error}))
    assert data["message"] == "an error occurred"
    assert data["error"] == {
        "type": "RuntimeError",
        "message": "boom",
        "stack_trace": extract_stack_trace(error),
    }


def test_error_attribute_string_is_not_expanded():
    data = EcsMapper().entry_as_json(
        _entry(message="an error occurred", attributes={"error": "error string"})
    )
    assert data["error"] == "error string"


def test_backtrace_cleaner_applies_to_message_and_attribute_errors():
    mapper = EcsMapper()
    mapper.backtrace_cleaner = lambda trace: ["redacted"]
    from_message = mapper.entry_as_json(_entry(message=_raised()))
    from_attribute = mapper.entry_as_json(_entry(attributes={"error": _raised()}))
    assert from_message["error"]["stack_trace"] == ["redacted"]
    assert from_attribute["error"]["stack_trace"] == ["redacted"]


def test_error_attribute_replaces_message_error_object():
    data = EcsMapper().entry_as_json(
        _entry(message=_raised("from message"), attributes={"error": ValueError("from attribute")})
    )
    assert data["message"] == "RuntimeError: from message"
    assert data["error"] == {"type": "ValueError", "message": "from attribute"}


def test_event_attributes_still_merge_with_duration():
    data = EcsMapper().entry_as_json(
        _entry(attributes={"duration": 1, "event.kind": "metric", "event.dataset": "app"})
    )
    assert data["event"] == {"duration": 1_000_000_000, "kind": "metric", "dataset": "app"}


def test_exceptions_without_traceback_omit_stack_trace():
    mapper = EcsMapper()
    from_message = mapper.entry_as_json(_entry(message=RuntimeError("boom")))
    from_attribute = mapper.entry_as_json(_entry(attributes={"error": RuntimeError("boom")}))
    assert from_message["message"] == "RuntimeError: boom"
    assert from_message["error"] == {"type": "RuntimeError", "message": "boom"}
    assert from_attribute["error"] == {"type": "RuntimeError", "message": "boom"}


@pytest.mark.parametrize(
    "attributes, expected",
    [
        ({"duration": 1.2}, 1_200_000_000),
        ({"duration_ms": 1200}, 1_200_000_000),
        ({"duration_micros": 1200}, 1_200_000),
        ({"duration_ns": 12000}, 12000),
    ],
)
def test_duration_attributes_normalize_to_nanoseconds(attributes, expected):
    entry = _entry(message="test", attributes=attributes)
    data = EcsMapper().entry_as_json(entry)
    assert data == {
        "@timestamp": UTC_STAMP,
        "log": {"level": "INFO"},
        "message": "test",
        "event": {"duration": expected},
    }
    # the entry keeps its own attributes
    assert entry.attributes == attributes


def test_duration_merges_with_event_attributes():
    entry = _entry(attributes={"duration_ms": 5, "event.dataset": "app.access"})
    data = EcsMapper().entry_as_json(entry)
    assert data["event"] == {"duration": 5_000_000, "dataset": "app.access"}


def test_max_message_length_truncates_and_can_change_between_calls():
    mapper = EcsMapper(max_message_length=5)
    assert mapper.entry_as_json(_entry(message="0123456789"))["message"] == "01234"
    mapper.max_message_length = None
    assert mapper.entry_as_json(_entry(message="0123456789"))["message"] == "0123456789"


@pytest.mark.parametrize("bad", [0, -1, 2.5, True])
def test_max_message_length_must_be_positive_int(bad):
    with pytest.raises(ValueError):
        EcsMapper(max_message_length=bad)


def test_mapping_message_passes_through_without_mutation():
    message = {"text": "hi", "blank": ""}
    entry = _entry(message=message, attributes={"message.extra": "x"})
    data = EcsMapper().entry_as_json(entry)
    assert data["message"] == {"text": "hi", "blank": "", "extra": "x"}
    assert message == {"text": "hi", "blank": ""}


def test_none_message_is_kept_as_null():
    data = EcsMapper().entry_as_json(_entry(message=None))
    assert "message" in data
    assert data["message"] is None


def test_time_restored_after_utc_conversion():
    entry = _entry()
    original = entry.time
    EcsMapper().entry_as_json(entry)
    assert entry.time is original
    assert not is_utc(entry.time)


def test_time_restored_when_mapping_raises():
    def failing_cleaner(trace):
        raise ValueError("cleaner broke")

    entry = _entry(message=_raised())
    original = entry.time
    mapper = EcsMapper(backtrace_cleaner=failing_cleaner)
    with pytest.raises(ValueError, match="cleaner broke"):
        mapper.entry_as_json(entry)
    assert entry.time is original


def test_format_without_literal_z_keeps_local_offset():
    mapper = EcsMapper(datetime_format="%Y-%m-%dT%H:%M:%S%z")
    assert mapper.utc_timestamps is False
    data = mapper.entry_as_json(_entry())
    assert data["@timestamp"] == "2024-05-01T14:30:45+0200"


def test_severity_label_is_emitted():
    entry = _entry()
    entry.severity = Severity.WARN
    assert EcsMapper().entry_as_json(entry)["log"] == {"level": "WARN"}


def test_map_entry_to_ecs_convenience_wrapper():
    data = map_entry_to_ecs(_entry(message="0123456789"), max_message_length=3)
    assert data["message"] == "012"
    assert data["@timestamp"] == UTC_STAMP
