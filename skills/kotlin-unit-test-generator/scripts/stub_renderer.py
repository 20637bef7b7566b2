"""
JUnit 4 test file rendering and placement.

Rendering is plain text templating: names are inserted as-is, so a name the
Kotlin compiler would reject produces a test file it rejects too. Output
contains no timestamps, so the same input always renders the same bytes.
"""

import os
from pathlib import Path
from typing import List, Tuple

import sys; sys.path.insert(0, str(__import__('pathlib').Path(__file__).resolve().parents[3] / 'scripts' / 'lib'))
from scaffold_logger import get_logger

from signature_extractor import FunctionSignature
from utgen_errors import WriteError

logger = get_logger(__name__)

INDENT = "    "
TEST_SUFFIX = "Test"


# ═══════════════════════════════════════════════════════════════════════════
# Stub Blocks
# ═══════════════════════════════════════════════════════════════════════════

def lower_first(name: str) -> str:
    """Lower-case only the first character: ``AddNumbers`` -> ``addNumbers``."""
    return name[:1].lower() + name[1:]


def render_test_function(function_name: str, param_names: str) -> str:
    """Render one ``@Test`` stub block, indented for the class body."""
    lines = [
        f"{INDENT}@Test",
        f"{INDENT}fun {lower_first(function_name)}{TEST_SUFFIX}() {{",
        f"{INDENT}{INDENT}//TODO: val result = {function_name}({param_names})",
        f"{INDENT}{INDENT}//TODO: Add logic for your test",
        f"{INDENT}{INDENT}//TODO: Assert the result is expected",
        f"{INDENT}}}",
    ]
    return "\n".join(lines)


def render_test_functions(signatures: List[FunctionSignature]) -> str:
    """Render every stub block, separated by one blank line."""
    return "\n\n".join(
        render_test_function(sig.name, sig.param_names) for sig in signatures
    )


# ═══════════════════════════════════════════════════════════════════════════
# Test File
# ═══════════════════════════════════════════════════════════════════════════

def render_test_file(package_name: str, class_base_name: str, test_file_name: str,
                     test_functions: str) -> str:
    """Assemble the complete test file around the rendered stub blocks."""
    lines = []
    if package_name:
        lines.append(f"package {package_name}")
        lines.append("")
    lines.extend([
        "import org.junit.After",
        "import org.junit.Before",
        "import org.junit.Test",
        "",
        "/**",
        f" * Unit tests for {test_file_name}, which will execute on the development machine (host).",
        " *",
        " * See [testing documentation](http://d.android.com/tools/testing).",
        " */",
        "",
        f"class {class_base_name}{TEST_SUFFIX} {{",
        f"{INDENT}@Before",
        f"{INDENT}fun setup() {{",
        f"{INDENT}{INDENT}//TODO: setup prerequisites for tests",
        f"{INDENT}}}",
        "",
        f"{INDENT}@After",
        f"{INDENT}fun tearDown() {{",
        f"{INDENT}{INDENT}//TODO: clear resources after test",
        f"{INDENT}}}",
        "",
        test_functions,
        "}",
    ])
    return "\n".join(lines) + "\n"


def locate_test_file(source_path: str) -> Tuple[str, str]:
    """Return (test directory, test file name) for source_path.

    The directory is the prefix before the source file name with the first
    ``main`` replaced by ``test``. The replacement is a plain substring
    replace, so a directory such as ``maintenance`` earlier in the path is
    the one that gets rewritten.
    """
    source = Path(source_path)
    test_file_name = f"{source.stem}{TEST_SUFFIX}{source.suffix}"
    test_dir = source_path.split(source.name)[0].replace("main", "test", 1)
    if not test_dir:
        raise WriteError("Cannot create test file")
    return test_dir, test_file_name


def write_test_file(test_dir: str, test_file_name: str, content: str) -> str:
    """Create test_dir if needed, overwrite the test file, return its absolute path."""
    test_path = os.path.join(test_dir, test_file_name)
    try:
        os.makedirs(test_dir, exist_ok=True)
        with open(test_path, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise WriteError(f"Cannot write test file {test_path}: {e}") from e

    logger.info(f"Wrote {test_path}")
    return os.path.abspath(test_path)
