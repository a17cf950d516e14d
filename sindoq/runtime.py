"""Per-language runtime details: interpreters, compilers and container images."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple


@dataclass(frozen=True)
class RuntimeInfo:
    """How code in one language is compiled and run."""

    language: str
    aliases: Tuple[str, ...] = ()
    runtime: str = ""
    file_ext: str = ""
    run_command: Tuple[str, ...] = ()
    compile_cmd: Optional[Tuple[str, ...]] = None
    docker_image: str = ""
    repl_mode: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "aliases", tuple(self.aliases))
        object.__setattr__(self, "run_command", tuple(self.run_command))
        if self.compile_cmd is not None:
            object.__setattr__(self, "compile_cmd", tuple(self.compile_cmd))

    @property
    def needs_compilation(self) -> bool:
        """True when the language has a separate compile step."""
        return self.compile_cmd is not None


def _runtime(
    language: str,
    aliases: Sequence[str],
    runtime: str,
    file_ext: str,
    run_command: Sequence[str],
    docker_image: str,
    compile_cmd: Optional[Sequence[str]] = None,
) -> RuntimeInfo:
    return RuntimeInfo(
        language=language,
        aliases=tuple(aliases),
        runtime=runtime,
        file_ext=file_ext,
        run_command=tuple(run_command),
        compile_cmd=tuple(compile_cmd) if compile_cmd is not None else None,
        docker_image=docker_image,
    )


_GO_TOOLCHAIN = "go" + "lang"

_DEFAULTS: Tuple[RuntimeInfo, ...] = (
    _runtime("Python", ("python", "python3", "py"), "python3", ".py",
             ("python3",), "python:3.12-slim"),
    _runtime("Go", ("go", _GO_TOOLCHAIN), "go", ".go",
             ("go", "run"), f"{_GO_TOOLCHAIN}:1.25-alpine"),
    _runtime("JavaScript", ("javascript", "js", "node", "nodejs"), "node", ".js",
             ("node",), "node:22-slim"),
    _runtime("TypeScript", ("typescript", "ts"), "ts-node", ".ts",
             ("npx", "ts-node"), "node:22-slim"),
    _runtime("Rust", ("rust", "rs"), "rustc", ".rs",
             ("/tmp/main",), "rust:1.75-slim", ("rustc", "-o", "/tmp/main")),
    _runtime("Java", ("java",), "java", ".java",
             ("java",), "eclipse-temurin:21-jdk", ("javac",)),
    _runtime("C", ("c",), "gcc", ".c",
             ("/tmp/main",), "gcc:14", ("gcc", "-o", "/tmp/main")),
    _runtime("C++", ("cpp", "c++", "cxx"), "g++", ".cpp",
             ("/tmp/main",), "gcc:14", ("g++", "-o", "/tmp/main")),
    _runtime("Ruby", ("ruby", "rb"), "ruby", ".rb",
             ("ruby",), "ruby:3.3-slim"),
    _runtime("PHP", ("php",), "php", ".php",
             ("php",), "php:8.3-cli"),
    _runtime("Shell", ("shell", "bash", "sh"), "bash", ".sh",
             ("bash",), "bash:5"),
    _runtime("R", ("r",), "Rscript", ".R",
             ("Rscript",), "r-base:4.3.2"),
    _runtime("Kotlin", ("kotlin", "kt"), "kotlin", ".kt",
             ("kotlin",), "zenika/kotlin:1.9"),
    _runtime("Swift", ("swift",), "swift", ".swift",
             ("swift",), "swift:5.9"),
    _runtime("Scala", ("scala",), "scala", ".scala",
             ("scala",), "sbtscala/scala-sbt:eclipse-temurin-21.0.1_12_1.9.7_3.3.1"),
    _runtime("Perl", ("perl", "pl"), "perl", ".pl",
             ("perl",), "perl:5.38"),
    _runtime("Lua", ("lua",), "lua", ".lua",
             ("lua",), "nickblah/lua:5.4"),
    _runtime("Haskell", ("haskell", "hs"), "runhaskell", ".hs",
             ("runhaskell",), "haskell:9.4"),
    _runtime("Elixir", ("elixir", "ex"), "elixir", ".exs",
             ("elixir",), "elixir:1.16"),
    _runtime("Clojure", ("clojure", "clj"), "clojure", ".clj",
             ("clojure",), "clojure:tools-deps"),
    _runtime("SQL", ("sql",), "sqlite3", ".sql",
             ("sqlite3", ":memory:"), "keinos/sqlite3:latest"),
)

DEFAULT_RUNTIMES: Mapping[str, RuntimeInfo] = MappingProxyType(
    {info.language: info for info in _DEFAULTS}
)


def _alias_keys(name: str, aliases: Iterable[str]) -> List[str]:
    return [name.lower(), *(alias.lower() for alias in aliases)]


_ALIASES: Dict[str, RuntimeInfo] = {
    key: info
    for info in DEFAULT_RUNTIMES.values()
    for key in _alias_keys(info.language, info.aliases)
}


def get_runtime_info(language: str) -> Optional[RuntimeInfo]:
    """Look a language up by exact name, then case-insensitively by name or alias."""
    info = DEFAULT_RUNTIMES.get(language)
    if info is not None:
        return info
    return _ALIASES.get(language.lower())


def get_docker_image(language: str) -> str:
    """Return the default container image for a language, or an empty string."""
    info = get_runtime_info(language)
    return info.docker_image if info else ""


def get_file_extension(language: str) -> str:
    """Return the usual file extension for a language, or an empty string."""
    info = get_runtime_info(language)
    return info.file_ext if info else ""


def get_run_command(language: str) -> Optional[List[str]]:
    """Return the command that runs code in a language, or None if unknown."""
    info = get_runtime_info(language)
    return list(info.run_command) if info else None


def needs_compilation(language: str) -> bool:
    """True when the language is known and needs a compile step."""
    info = get_runtime_info(language)
    return info is not None and info.needs_compilation


def supported_languages() -> List[str]:
    """Return the names of all languages with a default runtime."""
    return list(DEFAULT_RUNTIMES)


class RuntimeRegistry:
    """A registry of runtimes, seeded with the defaults and open to additions."""

    def __init__(self) -> None:
        self._runtimes: Dict[str, RuntimeInfo] = {}
        self._aliases: Dict[str, RuntimeInfo] = {}
        for name, info in DEFAULT_RUNTIMES.items():
            self.register(name, info)

    def register(self, name: str, info: RuntimeInfo) -> None:
        """Add or replace the runtime registered under name."""
        self._runtimes[name] = info
        for key in _alias_keys(name, info.aliases):
            self._aliases[key] = info

    def get(self, language: str) -> Optional[RuntimeInfo]:
        """Look a language up by exact name, then case-insensitively by alias."""
        info = self._runtimes.get(language)
        if info is not None:
            return info
        return self._aliases.get(language.lower())

    def languages(self) -> List[str]:
        """Return the names of all registered languages."""
        return list(self._runtimes)

    def __contains__(self, language: object) -> bool:
        return isinstance(language, str) and self.get(language) is not None

    def __len__(self) -> int:
        return len(self._runtimes)