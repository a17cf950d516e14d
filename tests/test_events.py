import pytest

from sindoq.events import (
    Emitter,
    Event,
    EventType,
    ExecutionCompleteData,
    ExecutionStartedData,
    new_error_event,
    new_event,
)


class _TestError(Exception):
    pass


def test_new_event():
    e = new_event(EventType.OUTPUT_STDOUT, "sandbox-123", "test data")
    assert e.type is EventType.OUTPUT_STDOUT
    assert e.sandbox_id == "sandbox-123"
    assert e.data == "test data"
    assert e.timestamp.year >= 2000
    assert e.metadata == {}
    assert e.error is None


def test_new_error_event():
    err = _TestError("test error")
    e = new_error_event(EventType.EXECUTION_ERROR, "sandbox-123", err)
    assert e.type is EventType.EXECUTION_ERROR
    assert e.error is err
    assert e.data is None
    assert e.metadata == {}


def test_with_metadata_chains():
    e = new_event(EventType.OUTPUT_STDOUT, "sandbox-123", None)
    returned = e.with_metadata("key1", "value1").with_metadata("key2", 42)
    assert returned is e
    assert e.metadata["key1"] == "value1"
    assert e.metadata["key2"] == 42


def test_with_metadata_when_metadata_missing():
    e = Event(type=EventType.FILE_READ, metadata=None)
    e.with_metadata("k", "v")
    assert e.metadata == {"k": "v"}


@pytest.mark.parametrize(
    "event_type, value",
    [
        (EventType.SANDBOX_CREATED, "sandbox.created"),
        (EventType.SANDBOX_STARTED, "sandbox.started"),
        (EventType.SANDBOX_STOPPED, "sandbox.stopped"),
        (EventType.SANDBOX_ERROR, "sandbox.error"),
        (EventType.EXECUTION_STARTED, "execution.started"),
        (EventType.EXECUTION_COMPLETE, "execution.complete"),
        (EventType.EXECUTION_ERROR, "execution.error"),
        (EventType.EXECUTION_TIMEOUT, "execution.timeout"),
        (EventType.OUTPUT_STDOUT, "output.stdout"),
        (EventType.OUTPUT_STDERR, "output.stderr"),
        (EventType.FILE_WRITTEN, "file.written"),
        (EventType.FILE_READ, "file.read"),
        (EventType.FILE_DELETED, "file.deleted"),
        (EventType.FILE_UPLOADED, "file.uploaded"),
        (EventType.PORT_PUBLISHED, "port.published"),
        (EventType.PORT_UNPUBLISHED, "port.unpublished"),
    ],
)
def test_event_types_round_trip(event_type, value):
    assert EventType(value) is event_type


def test_event_types_are_distinct_and_non_empty():
    events = [new_event(t, "sandbox-1", None) for t in EventType]
    values = [e.type.value for e in events]
    assert len(values) == 16
    assert len(set(values)) == 16
    assert all(values)


def test_emitter_is_abstract():
    with pytest.raises(TypeError):
        Emitter()


def test_payload_dataclasses():
    started = ExecutionStartedData(language="Python", code_size=12)
    complete = ExecutionCompleteData(exit_code=0, duration=0.5, language="Python")
    assert started.code_size == 12
    assert complete.duration == 0.5
    assert complete == ExecutionCompleteData(0, 0.5, "Python")