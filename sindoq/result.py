"""Results of code and command execution, and the options that shape it."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

DEFAULT_TIMEOUT = 30.0
DEFAULT_WORK_DIR = "/workspace"


@dataclass
class Artifact:
    """A file or output produced by an execution."""

    name: str = ""
    path: str = ""
    mime_type: str = ""
    size: int = 0
    data: Optional[bytes] = None


@dataclass
class ExecutionResult:
    """Outcome of running code; duration is in seconds."""

    exit_code: int = 0
    stdout: str = ""
    stderr: str = ""
    duration: float = 0.0
    language: str = ""
    artifacts: List[Artifact] = field(default_factory=list)
    error: Optional[BaseException] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def success(self) -> bool:
        """True when the exit code is zero and no error was recorded."""
        return self.exit_code == 0 and self.error is None


@dataclass
class CommandResult:
    """Outcome of running a shell command; duration is in seconds."""

    exit_code: int = 0
    stdout: str = ""
    stderr: str = ""
    duration: float = 0.0

    def success(self) -> bool:
        """True when the exit code is zero."""
        return self.exit_code == 0


@dataclass
class ExecutionOptions:
    """How code should be executed; timeout is in seconds, 0 meaning unset."""

    language: str = ""
    filename: str = ""
    timeout: float = 0.0
    env: Optional[Dict[str, str]] = None
    work_dir: str = ""
    stdin: str = ""
    files: Optional[Dict[str, bytes]] = None
    keep_artifacts: bool = False

    def merge(self, defaults: "ExecutionOptions") -> "ExecutionOptions":
        """Return a copy with unset values filled in from defaults."""
        return dataclasses.replace(
            self,
            timeout=self.timeout or defaults.timeout,
            work_dir=self.work_dir or defaults.work_dir,
            env=defaults.env if self.env is None else self.env,
            files=defaults.files if self.files is None else self.files,
        )


def default_execution_options() -> ExecutionOptions:
    """Return the standard defaults: 30 s timeout in /workspace."""
    return ExecutionOptions(
        timeout=DEFAULT_TIMEOUT,
        work_dir=DEFAULT_WORK_DIR,
        env={},
        files={},
    )


def merge_options(
    options: Optional[ExecutionOptions], defaults: ExecutionOptions
) -> ExecutionOptions:
    """Merge options with defaults; missing options yield the defaults themselves."""
    if options is None:
        return defaults
    return options.merge(defaults)