import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "scripts" / "lib"))
sys.path.insert(0, str(REPO_ROOT / "skills" / "kotlin-unit-test-generator" / "scripts"))

CALC_SOURCE = """package com.x

class Calc {
    @GenerateTest
    fun addNumbers(a: Int, b: Int): Int {
        return a + b
    }

    fun untouched(x: Int): Int = x
}
"""

BUILD_GRADLE = """plugins {
    id 'org.jetbrains.kotlin.jvm'
}

dependencies {
    testImplementation 'junit:junit:4.13.2'
}
"""


def make_module(root, build_file="build.gradle", build_text=BUILD_GRADLE,
                source_rel="src/main/kotlin/com/x/Calc.kt", source_text=CALC_SOURCE):
    """Create a Gradle module under root and return the source file path."""
    root.mkdir(parents=True, exist_ok=True)
    if build_file:
        (root / build_file).write_text(build_text, encoding="utf-8")
    source = root / source_rel
    source.parent.mkdir(parents=True, exist_ok=True)
    source.write_text(source_text, encoding="utf-8")
    return source


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Run from tmp_path so source paths can be given relative, as a user would."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("UTGEN_CONFIG", raising=False)
    monkeypatch.delenv("UTGEN_LOG_DIR", raising=False)
    return tmp_path


@pytest.fixture
def calc_module(workspace):
    make_module(workspace / "app")
    return "app/src/main/kotlin/com/x/Calc.kt"
