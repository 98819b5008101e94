"""
Reader and writer for ifcfg-style ``KEY=value`` files.

Entry order is the order keys are first seen. Comment lines (first
non-whitespace character ``#``), blank lines, lines without ``=`` and lines
with an empty key are skipped. Only the text between the first and second
``=`` is kept as the value.
"""

import logging
from collections.abc import Mapping

logger = logging.getLogger(__name__)

NM_CONTROLLED_KEY = "NM_CONTROLLED"
ENCODING = "utf-8"
# Undecodable bytes survive a parse and write cycle unchanged
ENCODING_ERRORS = "surrogateescape"


def parse_config(text: str | bytes) -> dict[str, str | None]:
    """
    Parse ifcfg text into an ordered mapping.

    ``NM_CONTROLLED`` is always forced to ``"no"`` after parsing.

    Args:
        text: File contents, either decoded text or raw bytes

    Returns:
        Ordered dict of key to value
    """
    if isinstance(text, bytes):
        text = text.decode(ENCODING, ENCODING_ERRORS)

    entries: dict[str, str | None] = {}
    for lineno, line in enumerate(text.split("\n"), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if "=" not in stripped:
            logger.debug(f"Skipping line {lineno} without '=': {stripped!r}")
            continue

        segments = stripped.split("=")
        key = segments[0].strip()
        if not key:
            logger.debug(f"Skipping line {lineno} with empty key")
            continue
        entries[key] = segments[1].strip()

    entries[NM_CONTROLLED_KEY] = "no"
    return entries


def is_blank(value: str | None) -> bool:
    return value is None or value == ""


def serialize_config(entries: Mapping[str, str | None]) -> str:
    """
    Render entries as ``KEY=value`` lines, dropping blank values.

    Lines are joined with ``\\n`` and there is no trailing newline.
    """
    return "\n".join(f"{key}={value}" for key, value in entries.items() if not is_blank(value))


def encode_config(entries: Mapping[str, str | None]) -> bytes:
    return serialize_config(entries).encode(ENCODING, ENCODING_ERRORS)
