# sindoq

Building blocks for running code in isolated environments: an event bus,
execution results and options, streaming output, file-system interfaces for
sandboxes, a table of language runtimes and programming-language detection.

The package has no third-party dependencies.

## Installation

```
pip install sindoq
```

To run the test suite:

```
pip install "sindoq[test]"
pytest
```

## Detecting a language

```python
from sindoq.detect import Detector, full, quick

result = full('print("Hello")', "test.py")
print(result.language, result.confidence, result.method)   # Python 0.95 extension

print(quick("#!/bin/bash\necho hello"))                    # Shell

detector = Detector()
detector.add_mapping(".mylang", "MyLang")
print(detector.detect_from_filename("main.mylang").language)  # MyLang
```

`Detector.detect` tries, in order: an exact file name such as `Makefile`
(confidence 1.0), the file extension (0.95), a `#!` line (0.95), content
analysis of modelines, file names, shebangs and extensions (0.9, or 0.8 when
several candidates have to be told apart), and last, pattern heuristics that
count characteristic constructs of each language (0.2 to 0.8). Each
`DetectResult` carries the language (empty when unknown), a confidence and
the method that produced it. `DetectOptions` switches the shebang, content
and heuristic steps on or off; `default_detect_options()` enables all three.

The lower-level lookups live in `sindoq.linguist`: `language_by_filename`,
`language_by_extension`, `language_by_shebang` and `candidate_languages`.

## Runtimes

```python
from sindoq.runtime import get_runtime_info, get_docker_image, needs_compilation, RuntimeRegistry

info = get_runtime_info("py")          # aliases are case-insensitive
print(info.runtime, info.docker_image) # python3 python:3.12-slim
print(needs_compilation("Rust"))       # True
print(get_docker_image("Unknown"))     # empty string

registry = RuntimeRegistry()           # starts with the default runtimes
print(sorted(registry.languages())[:3])
```

`supported_languages()` lists every language with a default runtime;
`get_file_extension` and `get_run_command` return the extension and run
command of a language.

## Events

```python
from sindoq.bus import Bus
from sindoq.events import EventType, new_event

bus = Bus()
unsubscribe = bus.subscribe(EventType.OUTPUT_STDOUT, lambda e: print(e.data))
bus.emit_sync(new_event(EventType.OUTPUT_STDOUT, "sandbox-1", "hello"))
unsubscribe()
```

`emit` delivers on background threads; `emit_sync` calls every handler before
returning. `subscribe_all` and `subscribe_multiple` register catch-all and
multi-type handlers, `subscriber_count` and `clear` inspect and reset the bus.

## Results and streams

```python
from sindoq.result import ExecutionOptions, default_execution_options
from sindoq.stream import MultiStreamWriter

options = ExecutionOptions(language="Python").merge(default_execution_options())
print(options.timeout, options.work_dir)   # 30.0 /workspace

writer = MultiStreamWriter(10)
writer.on_event(lambda event: print(event.type.value, event.data))
writer.stdout().write(b"out")
writer.close()
```

Each `OutputStream` also buffers its events in a bounded channel returned by
`events()`; when the buffer is full new events are dropped. Writing to a
closed stream raises `StreamClosedError`.

## File systems

`sindoq.filesystem` defines the abstract `FileSystem`, `Watcher` and
`WatchableFileSystem` interfaces that a sandbox back end implements, together
with the `FileInfo` and `WatchEvent` records they exchange.

## What the package does not do

It does not run code. There are no sandbox back ends, containers or virtual
machines here, and no command-line tool: the package supplies the events,
results, streams, interfaces, runtime table and language detection on which
such an executor can be built.