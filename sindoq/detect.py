"""Programming language detection for code about to be executed."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Pattern, Sequence, Tuple

from .linguist import (
    candidate_languages,
    language_by_extension,
    language_by_filename,
    language_by_shebang,
)

_FALLBACK_FILENAME = "code"

_RAW_PATTERNS: Mapping[str, Sequence[str]] = {
    "Python": (
        r"(?m)^import\s+\w+",
        r"(?m)^from\s+\w+\s+import",
        r"(?m)^def\s+\w+\s*\(",
        r"(?m)^class\s+\w+.*:",
        r"(?m)^\s*print\s*\(",
        r"exec\s*\(",
        r"range\s*\(",
        r"len\s*\(",
        r"str\s*\(",
        r"int\s*\(",
        r"list\s*\(",
        r"dict\s*\(",
        r"\.append\s*\(",
        r"\.join\s*\(",
        r"time\.sleep",
        r"for\s+\w+\s+in\s+",
        r"if\s+__name__\s*==",
        r"lambda\s+\w*:",
        r"\[\s*\w+\s+for\s+\w+\s+in",
    ),
    "Go": (
        r"(?m)^package\s+\w+",
        r"\bpackage\s+main\b",
        r"(?m)^import\s*\(",
        r"(?m)^func\s+\w*\s*\(",
        r"\bfunc\s+main\s*\(",
        r"(?m)^type\s+\w+\s+(struct|interface)",
        r":=",
        r"fmt\.Print",
        r"fmt\.Sprintf",
        r"fmt\.Errorf",
        r"errors\.New",
        r"make\s*\(\s*(map|chan|\[\])",
        r"go\s+func\s*\(",
        r"<-\s*\w+",
        r"defer\s+",
        r"panic\s*\(",
        r"recover\s*\(",
        r"range\s+\w+",
        r"\[\]byte",
        r"\[\]string",
        r"map\[string\]",
        r"interface\{\}",
        r"struct\s*\{",
    ),
    "JavaScript": (
        r"(?m)^const\s+\w+\s*=",
        r"(?m)^let\s+\w+\s*=",
        r"(?m)^var\s+\w+\s*=",
        r"(?m)^function\s+\w+\s*\(",
        r"=>\s*[{\(]",
        r"console\.log\s*\(",
        r"console\.error\s*\(",
        r"console\.warn\s*\(",
        r"require\s*\(",
        r"module\.exports",
        r"exports\.",
        r"document\.",
        r"window\.",
        r"async\s+function",
        r"await\s+",
        r"\.then\s*\(",
        r"\.catch\s*\(",
        r"JSON\.parse",
        r"JSON\.stringify",
        r"Array\.",
        r"Object\.",
        r"Promise\.",
        r"new\s+Promise",
        r"setTimeout\s*\(",
        r"setInterval\s*\(",
    ),
    "TypeScript": (
        r"(?m)^interface\s+\w+",
        r"(?m)^type\s+\w+\s*=",
        r":\s*(string|number|boolean|any)\b",
        r"<[A-Z]\w*>",
    ),
    "Rust": (
        r"(?m)^fn\s+\w+",
        r"\bfn\s+main\s*\(",
        r"(?m)^use\s+\w+",
        r"(?m)^mod\s+\w+",
        r"(?m)^struct\s+\w+",
        r"(?m)^impl\s+",
        r"(?m)^let\s+mut\s+",
        r"(?m)^pub\s+(fn|struct|enum|mod)",
        r"println!\s*\(",
        r"print!\s*\(",
        r"eprintln!\s*\(",
        r"format!\s*\(",
        r"vec!\s*\[",
        r"panic!\s*\(",
        r"->\s*(i32|i64|u32|u64|f32|f64|bool|String|&str|\(\))",
        r"&mut\s+\w+",
        r"&str",
        r"::new\s*\(",
        r"\.unwrap\s*\(",
        r"\.expect\s*\(",
        r"Option<",
        r"Result<",
        r"Some\s*\(",
        r"None\b",
        r"Ok\s*\(",
        r"Err\s*\(",
    ),
    "Java": (
        r"(?m)^public\s+class\s+\w+",
        r"(?m)^import\s+java\.",
        r"(?m)^package\s+\w+(\.\w+)*;",
        r"System\.out\.print",
        r"public\s+static\s+void\s+main",
    ),
    "Ruby": (
        r"""(?m)^require\s+['"]""",
        r"(?m)^def\s+\w+",
        r"(?m)^class\s+\w+",
        r"(?m)^module\s+\w+",
        r"\.each\s+do\s*\|",
        r"puts\s+",
    ),
    "PHP": (
        r"(?m)^<\?php",
        r"\$\w+\s*=",
        r"(?m)^function\s+\w+\s*\(",
        r"echo\s+",
        r"->\w+\(",
    ),
    "C": (
        r"(?m)^#include\s*<",
        r"(?m)^int\s+main\s*\(",
        r"printf\s*\(",
        r"(?m)^(void|int|char|float|double)\s+\w+\s*\(",
    ),
    "C++": (
        r"(?m)^#include\s*<iostream>",
        r"std::",
        r"cout\s*<<",
        r"(?m)^class\s+\w+\s*[:{]",
        r"(?m)^namespace\s+\w+",
    ),
    "C#": (
        r"(?m)^using\s+System",
        r"(?m)^namespace\s+\w+",
        r"(?m)^class\s+\w+",
        r"Console\.(Write|Read)",
        r"(?m)^public\s+(class|interface|enum)",
    ),
    "Shell": (
        r"(?m)^#!/bin/(ba)?sh",
        r"(?m)^\s*if\s+\[\s+",
        r"(?m)^\s*for\s+\w+\s+in\s+",
        r"\$\{?\w+\}?",
        r"(?m)^\s*echo\s+",
    ),
    "SQL": (
        r"(?mi)^SELECT\s+",
        r"(?mi)^INSERT\s+INTO",
        r"(?mi)^UPDATE\s+\w+\s+SET",
        r"(?mi)^CREATE\s+TABLE",
        r"(?mi)^DROP\s+TABLE",
    ),
    "R": (
        r"(?m)^library\s*\(",
        r"<-\s*",
        r"(?m)^function\s*\(",
        r"data\.frame\s*\(",
        r"ggplot\s*\(",
    ),
    "Kotlin": (
        r"(?m)^fun\s+\w+",
        r"(?m)^val\s+\w+",
        r"(?m)^var\s+\w+",
        r"(?m)^class\s+\w+",
        r"println\s*\(",
    ),
    "Swift": (
        r"(?m)^import\s+(Foundation|UIKit|SwiftUI|Cocoa|Darwin)",
        r"(?m)^func\s+\w+\s*\([^)]*\)\s*(->|\{)",
        r"(?m)^let\s+\w+\s*:\s*\w+",
        r"(?m)^var\s+\w+\s*:\s*\w+",
        r"(?m)^class\s+\w+\s*:\s*\w+",
        r"(?m)^struct\s+\w+",
        r"(?m)^enum\s+\w+",
        r"(?m)^protocol\s+\w+",
        r"guard\s+let",
        r"if\s+let",
        r"@IBOutlet",
        r"@IBAction",
        r"override\s+func",
    ),
    "Scala": (
        r"(?m)^object\s+\w+",
        r"(?m)^def\s+\w+",
        r"(?m)^val\s+\w+",
        r"(?m)^var\s+\w+",
        r"println\s*\(",
    ),
}

_PATTERNS: Dict[str, Tuple[Pattern[str], ...]] = {
    language: tuple(re.compile(p) for p in patterns)
    for language, patterns in _RAW_PATTERNS.items()
}


@dataclass
class DetectOptions:
    """Which detection strategies to use; filename is an optional hint."""

    filename: str = ""
    use_content: bool = False
    use_shebang: bool = False
    use_heuristics: bool = False


def default_detect_options() -> DetectOptions:
    """Return options with every strategy enabled and no filename hint."""
    return DetectOptions(use_content=True, use_shebang=True, use_heuristics=True)


@dataclass(frozen=True)
class DetectResult:
    """A detected language (empty if unknown), its confidence and the method used."""

    language: str
    confidence: float
    method: str


_UNKNOWN = DetectResult(language="", confidence=0.0, method="unknown")


def _scores(code: str, languages: Optional[Sequence[str]] = None) -> Dict[str, int]:
    names = _PATTERNS if languages is None else [l for l in languages if l in _PATTERNS]
    return {
        language: sum(1 for pattern in _PATTERNS[language] if pattern.search(code))
        for language in names
    }


def _best(scores: Mapping[str, int]) -> Tuple[str, int]:
    best_language, best_score = "", 0
    for language, score in scores.items():
        if score > best_score:
            best_language, best_score = language, score
    return best_language, best_score


def _classify(code: str, candidates: List[str]) -> str:
    """Pick the candidate whose characteristic constructs appear most often."""
    language, score = _best(_scores(code, candidates))
    return language if score > 0 else candidates[0]


def _extension(filename: str) -> str:
    base = filename.rsplit("/", 1)[-1]
    dot = base.rfind(".")
    return base[dot:] if dot >= 0 else ""


class Detector:
    """Identifies the programming language of a piece of code."""

    def __init__(self) -> None:
        self._custom_mappings: Dict[str, str] = {}

    def detect(self, code: str, options: Optional[DetectOptions] = None) -> DetectResult:
        """Detect the language by filename, shebang, content and then heuristics."""
        if options is None:
            options = default_detect_options()

        if options.filename:
            language = language_by_filename(options.filename)
            if language:
                return DetectResult(language, 1.0, "filename")
            language = language_by_extension(options.filename)
            if language:
                return DetectResult(language, 0.95, "extension")

        if options.use_shebang and code.strip().startswith("#!"):
            language = language_by_shebang(code)
            if language:
                return DetectResult(language, 0.95, "shebang")

        if options.use_content:
            filename = options.filename or _FALLBACK_FILENAME
            candidates = candidate_languages(filename, code)
            if len(candidates) == 1:
                return DetectResult(candidates[0], 0.9, "content")
            if candidates:
                language = _classify(code, candidates)
                if language:
                    return DetectResult(language, 0.8, "classifier")

        if options.use_heuristics:
            result = self._detect_by_patterns(code)
            if result is not None:
                return result

        return _UNKNOWN

    @staticmethod
    def _detect_by_patterns(code: str) -> Optional[DetectResult]:
        language, score = _best(_scores(code))
        if score < 1:
            return None
        confidence = min(max(score / 5.0, 0.2), 0.8)
        return DetectResult(language, confidence, "heuristic")

    def add_mapping(self, extension: str, language: str) -> None:
        """Map a file extension such as '.foo' to a language."""
        self._custom_mappings[extension] = language

    def detect_from_filename(self, filename: str) -> DetectResult:
        """Detect the language from the filename alone."""
        custom = self._custom_mappings.get(_extension(filename))
        if custom is not None:
            return DetectResult(custom, 1.0, "custom")
        language = language_by_filename(filename)
        if language:
            return DetectResult(language, 1.0, "filename")
        language = language_by_extension(filename)
        if language is not None:
            return DetectResult(language, 0.95, "extension")
        return _UNKNOWN


def quick(code: str) -> str:
    """Detect fast, without heuristics; return the language or an empty string."""
    options = DetectOptions(use_content=True, use_shebang=True, use_heuristics=False)
    return Detector().detect(code, options).language


def full(code: str, filename: str) -> DetectResult:
    """Detect with every strategy enabled and an optional filename hint."""
    options = default_detect_options()
    options.filename = filename
    return Detector().detect(code, options)