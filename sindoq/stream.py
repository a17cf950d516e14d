"""Real-time streaming of execution output."""

from __future__ import annotations

import enum
import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Deque, Iterator, List, Optional, Union


class StreamEventType(str, enum.Enum):
    """Kinds of stream events."""

    STDOUT = "stdout"
    STDERR = "stderr"
    START = "start"
    COMPLETE = "complete"
    ERROR = "error"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class StreamEvent:
    """An output event emitted during streaming execution."""

    type: StreamEventType
    data: str = ""
    timestamp: datetime = field(default_factory=_now)
    exit_code: int = 0
    error: Optional[BaseException] = None


StreamHandler = Callable[[StreamEvent], None]


class StreamClosedError(Exception):
    """Raised when writing to or reading past the end of a closed stream."""


class _EventChannel:
    """A bounded, closable queue that drops events when full."""

    def __init__(self, capacity: int) -> None:
        self._capacity = capacity
        self._items: Deque[StreamEvent] = deque()
        self._cond = threading.Condition()
        self._closed = False
        self._waiting = 0

    def offer(self, item: StreamEvent) -> bool:
        """Queue the item without blocking; return False if it was dropped."""
        with self._cond:
            if self._closed or len(self._items) >= self._capacity + self._waiting:
                return False
            self._items.append(item)
            self._cond.notify()
            return True

    def get(self, timeout: Optional[float] = None) -> StreamEvent:
        """Return the next event, raising TimeoutError or StreamClosedError."""
        with self._cond:
            self._waiting += 1
            try:
                ready = self._cond.wait_for(lambda: self._items or self._closed, timeout)
            finally:
                self._waiting -= 1
            if self._items:
                return self._items.popleft()
            if not ready:
                raise TimeoutError("no event available")
            raise StreamClosedError("stream is closed")

    def close(self) -> None:
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)

    def __iter__(self) -> Iterator[StreamEvent]:
        while True:
            try:
                yield self.get()
            except StreamClosedError:
                return


class OutputStream:
    """A writable stream turning each write into an event of one type."""

    def __init__(self, buffer_size: int, event_type: StreamEventType) -> None:
        if buffer_size < 0:
            raise ValueError("buffer_size must not be negative")
        self._lock = threading.Lock()
        self._events = _EventChannel(buffer_size)
        self._handlers: List[StreamHandler] = []
        self._closed = False
        self.event_type = event_type

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, data: Union[bytes, str]) -> int:
        """Emit the data as an event and return the number of items written."""
        if self._closed:
            raise StreamClosedError("write on closed stream")
        text = data.decode("utf-8", errors="replace") if isinstance(data, (bytes, bytearray)) else data
        self.write_event(StreamEvent(type=self.event_type, data=text))
        return len(data)

    def write_event(self, event: StreamEvent) -> None:
        """Queue the event (dropping it if the buffer is full) and run handlers."""
        with self._lock:
            if self._closed:
                raise StreamClosedError("write on closed stream")
            handlers = list(self._handlers)
        self._events.offer(event)
        for handler in handlers:
            handler(event)

    def events(self) -> _EventChannel:
        """Return the channel of buffered events."""
        return self._events

    def on_event(self, handler: StreamHandler) -> None:
        """Register a handler called synchronously for every event."""
        with self._lock:
            self._handlers.append(handler)

    def close(self) -> None:
        """Close the stream; closing twice is harmless."""
        with self._lock:
            if not self._closed:
                self._closed = True
                self._events.close()

    def __enter__(self) -> "OutputStream":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class MultiStreamWriter:
    """Combines a stdout and a stderr stream into one event channel."""

    def __init__(self, buffer_size: int) -> None:
        self._stdout = OutputStream(buffer_size, StreamEventType.STDOUT)
        self._stderr = OutputStream(buffer_size, StreamEventType.STDERR)
        self._events = _EventChannel(buffer_size * 2)
        self._closed = False
        self._lock = threading.Lock()
        for source in (self._stdout, self._stderr):
            threading.Thread(target=self._forward, args=(source.events(),), daemon=True).start()

    def _forward(self, source: _EventChannel) -> None:
        for event in source:
            if not self._closed:
                self._events.offer(event)

    @property
    def closed(self) -> bool:
        return self._closed

    def stdout(self) -> OutputStream:
        return self._stdout

    def stderr(self) -> OutputStream:
        return self._stderr

    def events(self) -> _EventChannel:
        """Return the combined event channel."""
        return self._events

    def on_event(self, handler: StreamHandler) -> None:
        """Register a handler for events of both streams."""
        self._stdout.on_event(handler)
        self._stderr.on_event(handler)

    def close(self) -> None:
        """Close both streams and the combined channel."""
        with self._lock:
            if not self._closed:
                self._closed = True
                self._stdout.close()
                self._stderr.close()
                self._events.close()

    def __enter__(self) -> "MultiStreamWriter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()