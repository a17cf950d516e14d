import pytest

from sindoq.detect import (
    DetectOptions,
    Detector,
    default_detect_options,
    full,
    quick,
)

PYTHON_CASES = [
    'def hello():\n    print("Hello, World!")\n    return "Hello"',
    "import os\nimport sys\n\nclass MyClass:\n    def __init__(self):\n        pass",
    '#!/usr/bin/env python3\nimport json\n\ndef main():\n    data = {"key": "value"}\n'
    '    print(json.dumps(data))\n\nif __name__ == "__main__":\n    main()',
]

JAVASCRIPT_CASES = [
    'function hello() {\n    console.log("Hello, World!");\n    return "Hello";\n}',
    "const fs = require('fs');\nconst path = require('path');\n\n"
    "const data = fs.readFileSync('file.txt');\nconsole.log(data);",
    'const hello = () => {\n    const message = "Hello";\n    console.log(message);\n'
    "    return message;\n};",
]

GO_HELLO = 'package main\n\nimport "fmt"\n\nfunc main() {\n\tfmt.Println("Hello, World!")\n}'
GO_CASES = [
    GO_HELLO,
    "package mypackage\n\ntype User struct {\n\tName string\n\tAge  int\n}\n\n"
    'func (u *User) Greet() string {\n\treturn "Hello, " + u.Name\n}',
]


@pytest.mark.parametrize("code", PYTHON_CASES)
def test_detect_python(code):
    assert Detector().detect(code, default_detect_options()).language == "Python"


@pytest.mark.parametrize("code", JAVASCRIPT_CASES)
def test_detect_javascript(code):
    assert Detector().detect(code, default_detect_options()).language == "JavaScript"


@pytest.mark.parametrize("code", GO_CASES)
def test_detect_go(code):
    assert Detector().detect(code, default_detect_options()).language == "Go"


@pytest.mark.parametrize(
    "code, options, expected",
    [
        ("some code", DetectOptions(filename="test.py"), "Python"),
        ("some code", DetectOptions(filename="index.js"), "JavaScript"),
        ("#!/usr/bin/env python3\nprint('hello')", DetectOptions(use_shebang=True), "Python"),
        ("#!/bin/bash\necho hello", DetectOptions(use_shebang=True), "Shell"),
    ],
)
def test_detect_with_options(code, options, expected):
    assert Detector().detect(code, options).language == expected


def test_detect_by_extension_method_and_confidence():
    result = Detector().detect("some code", DetectOptions(filename="test.py"))
    assert (result.method, result.confidence) == ("extension", 0.95)


def test_detect_by_shebang_method():
    result = Detector().detect("#!/bin/bash\necho hi", DetectOptions(use_shebang=True))
    assert result.method == "shebang"
    assert result.confidence == 0.95


def test_detect_heuristic_confidence_is_capped():
    result = Detector().detect(GO_HELLO, default_detect_options())
    assert result.method == "heuristic"
    assert result.confidence == pytest.approx(0.8)


def test_heuristic_confidence_within_bounds():
    result = Detector().detect(PYTHON_CASES[0], default_detect_options())
    assert result.method == "heuristic"
    assert 0.2 <= result.confidence <= 0.8


def test_detect_without_options_uses_defaults():
    assert Detector().detect(GO_HELLO).language == "Go"


def test_detect_unknown():
    result = Detector().detect("", default_detect_options())
    assert result.language == ""
    assert result.method == "unknown"
    assert result.confidence == 0


def test_heuristics_disabled_gives_unknown():
    options = DetectOptions(use_content=True, use_shebang=True, use_heuristics=False)
    assert Detector().detect(GO_HELLO, options).method == "unknown"


def test_ambiguous_extension_uses_classifier():
    code = "std::string s;\nstd::cout << s;"
    result = Detector().detect(code, DetectOptions(filename="x.h", use_content=True))
    assert result.language == "C++"
    assert result.method == "classifier"
    assert result.confidence == 0.8


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("main.py", "Python"),
        ("app.js", "JavaScript"),
        ("main.go", "Go"),
        ("App.java", "Java"),
        ("script.rb", "Ruby"),
        ("main.c", "C"),
        ("main.cpp", "C++"),
        ("script.sh", "Shell"),
    ],
)
def test_detect_from_filename(filename, expected):
    assert Detector().detect_from_filename(filename).language == expected


def test_detect_from_exact_filename():
    result = Detector().detect_from_filename("Makefile")
    assert result.language == "Makefile"
    assert result.method == "filename"


def test_detect_from_unknown_filename():
    result = Detector().detect_from_filename("data.zzz")
    assert result.language == ""
    assert result.method == "unknown"


def test_custom_mapping_takes_precedence():
    detector = Detector()
    detector.add_mapping(".py", "Snake")
    result = detector.detect_from_filename("main.py")
    assert result.language == "Snake"
    assert result.method == "custom"
    assert result.confidence == 1.0


@pytest.mark.parametrize(
    "code, expected",
    [
        ('#!/usr/bin/env python3\nprint("Hello")', "Python"),
        ('#!/bin/bash\necho "Hello"', "Shell"),
    ],
)
def test_quick(code, expected):
    assert quick(code) == expected


def test_full():
    result = full('print("Hello")', "test.py")
    assert result.language == "Python"
    assert result.confidence >= 0.9


def test_default_detect_options():
    options = default_detect_options()
    assert options.use_content is True
    assert options.use_shebang is True
    assert options.use_heuristics is True
    assert options.filename == ""