"""Language identification from file names, extensions, shebangs and modelines."""

from __future__ import annotations

import re
from pathlib import PurePosixPath
from typing import Callable, Dict, List, Optional, Sequence, Tuple

_FILENAMES: Dict[str, Tuple[str, ...]] = {
    "Makefile": ("Makefile",),
    "makefile": ("Makefile",),
    "GNUmakefile": ("Makefile",),
    "Dockerfile": ("Dockerfile",),
    "Containerfile": ("Dockerfile",),
    "CMakeLists.txt": ("CMake",),
    "Rakefile": ("Ruby",),
    "Gemfile": ("Ruby",),
    "Vagrantfile": ("Ruby",),
    "Jenkinsfile": ("Groovy",),
    ".bashrc": ("Shell",),
    ".bash_profile": ("Shell",),
    ".zshrc": ("Shell",),
    ".profile": ("Shell",),
    "go.mod": ("Go Module",),
    "Pipfile": ("TOML",),
}

_LANGUAGE_EXTENSIONS: Dict[str, Tuple[str, ...]] = {
    "Python": (".py", ".pyw", ".pyi"),
    "JavaScript": (".js", ".mjs", ".cjs", ".jsx"),
    "TypeScript": (".ts", ".mts", ".cts"),
    "Go": (".go",),
    "Rust": (".rs",),
    "Java": (".java",),
    "C": (".c", ".h"),
    "C++": (".cpp", ".cc", ".cxx", ".c++", ".hpp", ".hh", ".hxx", ".h"),
    "Objective-C": (".m", ".h"),
    "C#": (".cs",),
    "Ruby": (".rb", ".rake", ".gemspec"),
    "PHP": (".php", ".phtml"),
    "Shell": (".sh", ".bash", ".zsh", ".ksh"),
    "Perl": (".pl", ".pm"),
    "Prolog": (".pl", ".pro"),
    "R": (".r",),
    "Rebol": (".r", ".reb"),
    "Kotlin": (".kt", ".kts"),
    "Swift": (".swift",),
    "Scala": (".scala", ".sc"),
    "Lua": (".lua",),
    "Haskell": (".hs",),
    "Elixir": (".ex", ".exs"),
    "Clojure": (".clj", ".cljs", ".cljc", ".edn"),
    "SQL": (".sql",),
    "MATLAB": (".m",),
    "Markdown": (".md", ".markdown"),
    "JSON": (".json",),
    "YAML": (".yml", ".yaml"),
    "TOML": (".toml",),
    "HTML": (".html", ".htm"),
    "CSS": (".css",),
    "Dart": (".dart",),
    "Julia": (".jl",),
    "Erlang": (".erl", ".hrl"),
    "Groovy": (".groovy", ".gradle"),
    "PowerShell": (".ps1", ".psm1"),
    "Makefile": (".mk", ".mak"),
    "Dockerfile": (".dockerfile",),
}


def _invert(table: Dict[str, Tuple[str, ...]]) -> Dict[str, Tuple[str, ...]]:
    inverted: Dict[str, List[str]] = {}
    for language, extensions in table.items():
        for ext in extensions:
            inverted.setdefault(ext, []).append(language)
    return {ext: tuple(langs) for ext, langs in inverted.items()}


_EXTENSIONS = _invert(_LANGUAGE_EXTENSIONS)

_INTERPRETERS: Dict[str, Tuple[str, ...]] = {
    "python": ("Python",),
    "bash": ("Shell",),
    "sh": ("Shell",),
    "zsh": ("Shell",),
    "ksh": ("Shell",),
    "dash": ("Shell",),
    "ash": ("Shell",),
    "mksh": ("Shell",),
    "node": ("JavaScript",),
    "nodejs": ("JavaScript",),
    "ts-node": ("TypeScript",),
    "ruby": ("Ruby",),
    "jruby": ("Ruby",),
    "rake": ("Ruby",),
    "perl": ("Perl",),
    "php": ("PHP",),
    "Rscript": ("R",),
    "lua": ("Lua",),
    "runhaskell": ("Haskell",),
    "runghc": ("Haskell",),
    "elixir": ("Elixir",),
    "swift": ("Swift",),
    "scala": ("Scala",),
    "kotlin": ("Kotlin",),
    "groovy": ("Groovy",),
    "julia": ("Julia",),
    "escript": ("Erlang",),
    "pwsh": ("PowerShell",),
    "make": ("Makefile",),
    "clojure": ("Clojure",),
    "awk": ("Awk",),
    "gawk": ("Awk",),
    "mawk": ("Awk",),
    "tclsh": ("Tcl",),
    "wish": ("Tcl",),
    "fish": ("fish",),
    "dart": ("Dart",),
}

_MODE_ALIASES: Dict[str, str] = {
    "sh": "Shell",
    "bash": "Shell",
    "zsh": "Shell",
    "js": "JavaScript",
    "javascript": "JavaScript",
    "ts": "TypeScript",
    "cpp": "C++",
    "c++": "C++",
    "objc": "Objective-C",
    "cs": "C#",
    "csharp": "C#",
    "make": "Makefile",
    "rb": "Ruby",
    "py": "Python",
}


def _known_languages() -> Dict[str, str]:
    names = set(_LANGUAGE_EXTENSIONS)
    names.update(lang for langs in _FILENAMES.values() for lang in langs)
    names.update(lang for langs in _INTERPRETERS.values() for lang in langs)
    known = {name.lower(): name for name in names}
    known.update(_MODE_ALIASES)
    return known


_LANGUAGE_BY_MODE = _known_languages()

_VERSION_SUFFIX = re.compile(r"[\d.]+$")
_EMACS_MODELINE = re.compile(r"-\*-(.*?)-\*-")
_VIM_MODELINE = re.compile(
    r"(?:^|\s)(?:vi|vim|ex)(?:[<=>]?\d+)?:.*?\b(?:ft|filetype|syntax)=([\w+#.-]+)"
)
_MODELINE_SEARCH_LINES = 5


def _by_filename(filename: str, code: str) -> List[str]:
    return list(_FILENAMES.get(PurePosixPath(filename).name, ()))


def _by_extension(filename: str, code: str) -> List[str]:
    name = PurePosixPath(filename).name.lower()
    for index, char in enumerate(name):
        if char == "." and index > 0 or (char == "." and index == 0 and "." in name[1:]):
            found = _EXTENSIONS.get(name[index:])
            if found:
                return list(found)
    return []


def _interpreter(code: str) -> Optional[str]:
    if not code.startswith("#!"):
        return None
    tokens = code[2:].split("\n", 1)[0].split()
    if not tokens:
        return None
    interpreter = PurePosixPath(tokens[0]).name
    if interpreter == "env":
        rest = [t for t in tokens[1:] if not t.startswith("-") and "=" not in t]
        if not rest:
            return None
        interpreter = PurePosixPath(rest[0]).name
    stripped = _VERSION_SUFFIX.sub("", interpreter)
    return stripped or interpreter


def _by_shebang(filename: str, code: str) -> List[str]:
    interpreter = _interpreter(code)
    if interpreter is None:
        return []
    return list(_INTERPRETERS.get(interpreter, ()))


def _emacs_mode(line: str) -> Optional[str]:
    match = _EMACS_MODELINE.search(line)
    if not match:
        return None
    content = match.group(1).strip()
    if ":" not in content:
        return content or None
    for part in content.split(";"):
        key, _, value = part.partition(":")
        if key.strip().lower() == "mode" and value.strip():
            return value.strip()
    return None


def _by_modeline(filename: str, code: str) -> List[str]:
    lines = code.splitlines()
    searched = lines[:_MODELINE_SEARCH_LINES] + lines[-_MODELINE_SEARCH_LINES:]
    for line in searched:
        mode = _emacs_mode(line)
        if mode is None:
            vim = _VIM_MODELINE.search(line)
            mode = vim.group(1) if vim else None
        if mode is not None:
            language = _LANGUAGE_BY_MODE.get(mode.lower())
            return [language] if language else []
    return []


_Strategy = Callable[[str, str], List[str]]
_STRATEGIES: Sequence[_Strategy] = (_by_modeline, _by_filename, _by_shebang, _by_extension)


def _unambiguous(found: List[str]) -> Optional[str]:
    return found[0] if len(found) == 1 else None


def language_by_filename(filename: str) -> Optional[str]:
    """Return the language fixed by an exact file name such as Makefile, if unambiguous."""
    return _unambiguous(_by_filename(filename, ""))


def language_by_extension(filename: str) -> Optional[str]:
    """Return the language fixed by the file's extension, if unambiguous."""
    return _unambiguous(_by_extension(filename, ""))


def language_by_shebang(code: str) -> Optional[str]:
    """Return the language named by the code's #! line, if unambiguous."""
    return _unambiguous(_by_shebang("", code))


def candidate_languages(filename: str, code: str) -> List[str]:
    """Return the possible languages, trying modeline, file name, shebang and extension.

    A strategy yielding exactly one language ends the search; otherwise the
    last non-empty set of candidates is returned, possibly empty.
    """
    candidates: List[str] = []
    for strategy in _STRATEGIES:
        found = strategy(filename, code)
        if len(found) == 1:
            return found
        if found:
            candidates = found
    return candidates