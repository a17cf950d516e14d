import threading

from sindoq.bus import Bus
from sindoq.events import Event, EventType


def test_new_bus_is_empty():
    bus = Bus()
    assert bus.subscriber_count() == 0


def test_subscribe_and_unsubscribe():
    bus = Bus()
    received = []
    unsubscribe = bus.subscribe(EventType.OUTPUT_STDOUT, received.append)

    bus.emit_sync(Event(type=EventType.OUTPUT_STDOUT, data="test output"))
    assert len(received) == 1
    assert received[0].data == "test output"

    unsubscribe()
    bus.emit_sync(Event(type=EventType.OUTPUT_STDOUT, data="after unsubscribe"))
    assert len(received) == 1


def test_subscribe_all():
    bus = Bus()
    received = []
    unsubscribe = bus.subscribe_all(received.append)

    bus.emit_sync(Event(type=EventType.OUTPUT_STDOUT, data="stdout"))
    bus.emit_sync(Event(type=EventType.OUTPUT_STDERR, data="stderr"))
    bus.emit_sync(Event(type=EventType.EXECUTION_COMPLETE))

    assert [e.type for e in received] == [
        EventType.OUTPUT_STDOUT,
        EventType.OUTPUT_STDERR,
        EventType.EXECUTION_COMPLETE,
    ]
    unsubscribe()
    bus.emit_sync(Event(type=EventType.OUTPUT_STDOUT))
    assert len(received) == 3


def test_multiple_subscribers():
    bus = Bus()
    counts = {"a": 0, "b": 0}

    def first(_):
        counts["a"] += 1

    def second(_):
        counts["b"] += 1

    unsub1 = bus.subscribe(EventType.OUTPUT_STDOUT, first)
    unsub2 = bus.subscribe(EventType.OUTPUT_STDOUT, second)
    bus.emit_sync(Event(type=EventType.OUTPUT_STDOUT))
    assert counts == {"a": 1, "b": 1}
    unsub1()
    unsub2()
    assert bus.subscriber_count() == 0


def test_event_filtering():
    bus = Bus()
    stdout, stderr = [], []
    bus.subscribe(EventType.OUTPUT_STDOUT, stdout.append)
    bus.subscribe(EventType.OUTPUT_STDERR, stderr.append)

    bus.emit_sync(Event(type=EventType.OUTPUT_STDOUT))
    assert len(stdout) == 1
    assert len(stderr) == 0


def test_clear():
    bus = Bus()
    received = []
    bus.subscribe(EventType.OUTPUT_STDOUT, received.append)
    bus.subscribe_all(received.append)
    bus.clear()
    bus.emit_sync(Event(type=EventType.OUTPUT_STDOUT))
    assert received == []
    assert bus.subscriber_count() == 0


def test_subscriber_count():
    bus = Bus()
    assert bus.subscriber_count() == 0

    unsub1 = bus.subscribe(EventType.OUTPUT_STDOUT, lambda e: None)
    assert bus.subscriber_count() == 1

    unsub2 = bus.subscribe_all(lambda e: None)
    assert bus.subscriber_count() == 2

    unsub1()
    assert bus.subscriber_count() == 1

    unsub2()
    assert bus.subscriber_count() == 0


def test_unsubscribe_is_idempotent():
    bus = Bus()
    unsub = bus.subscribe(EventType.FILE_READ, lambda e: None)
    bus.subscribe(EventType.FILE_READ, lambda e: None)
    unsub()
    unsub()
    assert bus.subscriber_count() == 1


def test_emit_async():
    bus = Bus()
    delivered = threading.Event()
    bus.subscribe(EventType.OUTPUT_STDOUT, lambda e: delivered.set())
    bus.emit(Event(type=EventType.OUTPUT_STDOUT))
    assert delivered.wait(2.0)


def test_subscribe_multiple():
    bus = Bus()
    received = []
    unsub = bus.subscribe_multiple(
        [EventType.OUTPUT_STDOUT, EventType.OUTPUT_STDERR], received.append
    )

    bus.emit_sync(Event(type=EventType.OUTPUT_STDOUT))
    bus.emit_sync(Event(type=EventType.OUTPUT_STDERR))
    bus.emit_sync(Event(type=EventType.EXECUTION_COMPLETE))
    assert len(received) == 2

    unsub()
    assert bus.subscriber_count() == 0


def test_concurrent_emit():
    bus = Bus()
    lock = threading.Lock()
    done = threading.Event()
    received = []

    def handler(event):
        with lock:
            received.append(event)
            if len(received) == 100:
                done.set()

    bus.subscribe(EventType.OUTPUT_STDOUT, handler)
    emitted = [Event(type=EventType.OUTPUT_STDOUT, data=i) for i in range(100)]
    threads = [threading.Thread(target=bus.emit, args=(e,)) for e in emitted]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert done.wait(5.0)
    assert sorted(e.data for e in received) == list(range(100))
    assert bus.subscriber_count() == 1