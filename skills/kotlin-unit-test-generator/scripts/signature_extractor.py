"""
Annotated function discovery in Kotlin source text.

This is a shallow pattern match, not a parser. Supported signature shape:

    @Annotation [private|public|protected|internal] fun name(params): ReturnType

Only the leading identifier of the return type is captured (``List`` for
``List<Int>``). Functions without a declared return type, extension
functions, and parameter lists containing ``)`` (function types, default
values with calls) do not match. Commas inside a parameter's type or default
value split it into bogus extra names.
"""

import re
from dataclasses import dataclass
from typing import List

import sys; sys.path.insert(0, str(__import__('pathlib').Path(__file__).resolve().parents[3] / 'scripts' / 'lib'))
from scaffold_logger import get_logger

from utgen_errors import ExtractionError

logger = get_logger(__name__)

_SIGNATURE_TEMPLATE = (
    r"@{annotation}\s+(?:private|public|protected|internal)?\s*"
    r"fun\s+(\w+)\(([^)]*)\):\s*(\w+)"
)


@dataclass
class FunctionSignature:
    """One annotated function found in the source text."""
    name: str
    parameters: str
    return_type: str

    @property
    def param_names(self) -> str:
        return parameter_names(self.parameters)


def signature_pattern(annotation_name: str) -> "re.Pattern[str]":
    return re.compile(_SIGNATURE_TEMPLATE.format(annotation=re.escape(annotation_name)))


def parameter_names(parameters: str) -> str:
    """Reduce ``a: Int, b: String`` to ``a, b``.

    Takes the first whitespace-delimited token of each comma-separated piece
    and removes colons from it.
    """
    names = []
    for piece in parameters.split(","):
        tokens = piece.strip().split()
        first = tokens[0] if tokens else ""
        names.append(first.replace(":", ""))
    return ", ".join(names)


def find_annotated_functions(source: str, annotation_name: str) -> List[FunctionSignature]:
    """Return every annotated function in text order, duplicates included."""
    matches = [
        FunctionSignature(name=m.group(1), parameters=m.group(2), return_type=m.group(3))
        for m in signature_pattern(annotation_name).finditer(source)
    ]
    logger.info(f"Found {len(matches)} function(s) annotated with @{annotation_name}")
    for sig in matches:
        logger.debug(f"  {sig.name}({sig.param_names}): {sig.return_type}")
    return matches


def extract_signatures(source: str, annotation_name: str) -> List[FunctionSignature]:
    """Like find_annotated_functions, but an empty result is an error."""
    signatures = find_annotated_functions(source, annotation_name)
    if not signatures:
        raise ExtractionError("No function found to generate unit tests")
    return signatures
