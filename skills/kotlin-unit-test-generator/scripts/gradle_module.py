"""
Gradle module resolution for a source file.

Answers three questions about a path like
``app/src/main/kotlin/com/x/Calc.kt``:

  - which build file governs it (``app/build.gradle`` or ``app/build.gradle.kts``)
  - does that build file declare test dependencies
  - which package the file belongs to (``com.x``)

All lookups are literal string operations on the path as given; nothing is
normalised or resolved against the filesystem beyond a single directory
listing of the module root.
"""

import os
from typing import Optional

import sys; sys.path.insert(0, str(__import__('pathlib').Path(__file__).resolve().parents[3] / 'scripts' / 'lib'))
from scaffold_logger import get_logger

from utgen_config import GeneratorConfig
from utgen_errors import ConfigResolutionError

logger = get_logger(__name__)

BUILD_FILE_NAMES = ("build.gradle", "build.gradle.kts")


# ── Module Locator ───────────────────────────────────────────────────────────

def module_root(source_path: str) -> str:
    """Return the path prefix before the first ``/src`` segment."""
    root = source_path.split("/src")[0]
    if not root:
        raise ConfigResolutionError("file path should contain /src")
    return root


def find_build_file(source_path: str) -> str:
    """Locate the build file in the module root of source_path.

    Only the module root itself is listed; parent directories are never
    searched. ``build.gradle`` wins over ``build.gradle.kts`` when both exist.
    """
    root = module_root(source_path)

    if not os.path.isdir(root):
        logger.debug(f"Module root {root} is not a directory")
        raise ConfigResolutionError("Cannot determine gradle file of the provided module")

    try:
        entries = set(os.listdir(root))
    except OSError as e:
        raise ConfigResolutionError(f"Cannot list module root {root}: {e}") from e

    for name in BUILD_FILE_NAMES:
        if name in entries:
            build_file = f"{root}/{name}"
            logger.info(f"Build file: {build_file}")
            return build_file

    logger.debug(f"None of {BUILD_FILE_NAMES} found in {root}")
    raise ConfigResolutionError("Cannot determine gradle file of the provided module")


# ── Dependency Checker ───────────────────────────────────────────────────────

def has_test_dependencies(build_file: str, config: Optional[GeneratorConfig] = None) -> bool:
    """Check the build file text for the test dependency marker."""
    config = config or GeneratorConfig()
    if not os.path.isfile(build_file):
        return False
    try:
        with open(build_file, "r", encoding="utf-8", errors="replace") as f:
            content = f.read()
    except OSError as e:
        raise ConfigResolutionError(f"Cannot read build file {build_file}: {e}") from e
    return config.dependency_marker in content


# ── Package Resolver ─────────────────────────────────────────────────────────

def source_root_marker(source_path: str, config: Optional[GeneratorConfig] = None) -> str:
    """Return the first configured source root contained in source_path."""
    config = config or GeneratorConfig()
    for marker in config.source_roots:
        if marker in source_path:
            return marker
    raise ConfigResolutionError(
        f"file path should contain {' or '.join(config.source_roots)}"
    )


def extract_package_name(source_path: str, config: Optional[GeneratorConfig] = None) -> str:
    """Derive the dotted package name from the directories after the source root.

    >>> extract_package_name("app/src/main/kotlin/com/x/Calc.kt")
    'com.x'
    """
    marker = source_root_marker(source_path, config)
    package_path = source_path.split(marker, 1)[1]
    package_dir = package_path.rpartition("/")[0]
    package = package_dir.replace("/", ".")
    if package.startswith("."):
        package = package[1:]
    return package
