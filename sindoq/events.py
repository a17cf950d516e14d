"""Sandbox events and the emitter interface that publishes them."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional


class EventType(str, enum.Enum):
    """Categories of sandbox events."""

    SANDBOX_CREATED = "sandbox.created"
    SANDBOX_STARTED = "sandbox.started"
    SANDBOX_STOPPED = "sandbox.stopped"
    SANDBOX_ERROR = "sandbox.error"

    EXECUTION_STARTED = "execution.started"
    EXECUTION_COMPLETE = "execution.complete"
    EXECUTION_ERROR = "execution.error"
    EXECUTION_TIMEOUT = "execution.timeout"

    OUTPUT_STDOUT = "output.stdout"
    OUTPUT_STDERR = "output.stderr"

    FILE_WRITTEN = "file.written"
    FILE_READ = "file.read"
    FILE_DELETED = "file.deleted"
    FILE_UPLOADED = "file.uploaded"

    PORT_PUBLISHED = "port.published"
    PORT_UNPUBLISHED = "port.unpublished"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Event:
    """A single event raised by a sandbox."""

    type: EventType
    sandbox_id: str = ""
    timestamp: datetime = field(default_factory=_now)
    data: Any = None
    error: Optional[BaseException] = None
    metadata: Optional[Dict[str, Any]] = field(default_factory=dict)

    def with_metadata(self, key: str, value: Any) -> "Event":
        """Attach a metadata entry and return the event for chaining."""
        if self.metadata is None:
            self.metadata = {}
        self.metadata[key] = value
        return self


EventHandler = Callable[[Event], None]


def new_event(event_type: EventType, sandbox_id: str, data: Any) -> Event:
    """Create an event carrying a data payload."""
    return Event(type=event_type, sandbox_id=sandbox_id, data=data)


def new_error_event(event_type: EventType, sandbox_id: str, error: BaseException) -> Event:
    """Create an event carrying an error."""
    return Event(type=event_type, sandbox_id=sandbox_id, error=error)


class Emitter(ABC):
    """Publishes events to subscribers."""

    @abstractmethod
    def emit(self, event: Event) -> None:
        """Send an event to every relevant subscriber."""

    @abstractmethod
    def subscribe(self, event_type: EventType, handler: EventHandler) -> Callable[[], None]:
        """Register a handler for one event type; return an unsubscribe function."""

    @abstractmethod
    def subscribe_all(self, handler: EventHandler) -> Callable[[], None]:
        """Register a handler for every event; return an unsubscribe function."""


@dataclass(frozen=True)
class ExecutionStartedData:
    """Payload of execution.started events."""

    language: str
    code_size: int


@dataclass(frozen=True)
class ExecutionCompleteData:
    """Payload of execution.complete events; duration is in seconds."""

    exit_code: int
    duration: float
    language: str


@dataclass(frozen=True)
class OutputData:
    """Payload of output events."""

    content: str
    line: int


@dataclass(frozen=True)
class FileEventData:
    """Payload of file events."""

    path: str
    size: int


@dataclass(frozen=True)
class PortEventData:
    """Payload of port events."""

    port: int
    public_url: str