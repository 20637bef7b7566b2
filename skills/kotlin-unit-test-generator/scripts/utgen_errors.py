"""Errors raised by the unit test scaffold generator.

Every stage raises one of these; only the CLI entry point turns them into an
``Error: ...`` line on stderr and a non-zero exit status.
"""


class UnitTestGenError(Exception):
    """Base class for all generator failures."""


class UsageError(UnitTestGenError):
    """Wrong arguments, or an empty annotation name / source path."""


class NotFoundError(UnitTestGenError):
    """The source file does not exist."""


class ConfigResolutionError(UnitTestGenError):
    """Package marker, module root, build file or config file could not be resolved."""


class DependencyError(UnitTestGenError):
    """The build file does not declare the test dependency marker."""


class ExtractionError(UnitTestGenError):
    """No annotated function was found in the source text."""


class WriteError(UnitTestGenError):
    """The test file path could not be derived or written."""
