"""Events, results, streams, file-system interfaces, runtimes and language detection for sandboxed code execution."""

__version__ = "0.1.0"

__all__ = [
    "bus",
    "detect",
    "events",
    "filesystem",
    "linguist",
    "result",
    "runtime",
    "stream",
]