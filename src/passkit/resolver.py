"""Decide which pass content goes into the archive.

An explicitly supplied value always wins over a file of the same name in
the source directory.
"""

import structlog
from pydantic import ValidationError

from passkit.errors import CantParsePassFile, PassContentNotFound
from passkit.passes import Pass
from passkit.sources import SourceDirectory

logger = structlog.get_logger(__name__)

PASS_FILENAME = "pass.json"
PERSONALIZATION_FILENAME = "personalization.json"


def resolve_pass_content(explicit_pass: Pass | None, source: SourceDirectory) -> Pass:
    """Return the pass to package.

    Args:
        explicit_pass: A pass supplied by the caller, or None.
        source: The source directory to look for pass.json in.

    Returns:
        ``explicit_pass`` if given, otherwise the parsed pass.json.

    Raises:
        CantReadEntry: If pass.json exists but cannot be read.
        CantParsePassFile: If pass.json is not a valid pass.
        PassContentNotFound: If there is neither an explicit pass nor a pass.json.
    """
    if explicit_pass is not None:
        return explicit_pass

    if not source.has_entry(PASS_FILENAME):
        raise PassContentNotFound()

    content = source.read_entry(PASS_FILENAME)
    try:
        return Pass.from_json(content)
    except ValidationError as e:
        logger.warning("pass_file_parse_failed", error_count=e.error_count())
        raise CantParsePassFile(str(e)) from e
