"""Note Extractor — find note tokens in an ABC tune without losing offsets.

Everything that is not tune body (header fields, inline ``[K:G]`` fields,
``%`` comments, quoted annotations and ``!...!`` decorations) is
overwritten with a filler of the same length. The masked text therefore
lines up character-for-character with the original, and match positions
are valid offsets into it. Inline fields are masked, not interpreted.

Repeats, variant endings and multiple voices are not interpreted: notes
come back in plain left-to-right order.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .notation import NOTE_PATTERN

logger = logging.getLogger(__name__)


MASK_FILLER: str = "*"

# One left-to-right scan: whichever region starts first wins, so a "%"
# inside a quoted annotation does not start a comment.
_NON_BODY = re.compile(
    r"^[A-Za-z]:.*$"  # header field line
    r"|\[[A-Za-z]:[^\]\n]*\]"  # inline field, e.g. [K:G]
    r'|"[^"\n]*"'  # quoted annotation or chord symbol
    r"|![^!\n]*!"  # decoration
    r"|%.*$",  # comment
    re.MULTILINE,
)


@dataclass(frozen=True)
class Note:
    """A note occurrence in the tune.

    Attributes:
        source_offset: Position of the token in the original text.
        raw_text: The token exactly as written (e.g. ``"^f'"``).
        normalized_text: Sounding spelling under the key signature;
            ``None`` until :func:`normalizer.normalize_notes` has run.
    """

    source_offset: int
    raw_text: str
    normalized_text: str | None = None


def mask_non_body(abc_text: str, filler: str = MASK_FILLER) -> str:
    """Overwrite non-body regions with *filler*, keeping the text length.

    Args:
        abc_text: The original tune text.
        filler: Single replacement character; must not be a note letter.

    Returns:
        A string of the same length in which only tune-body characters
        survive at their original positions.
    """
    if len(filler) != 1:
        raise ValueError(f"Mask filler must be a single character, got {filler!r}")

    return _NON_BODY.sub(lambda m: filler * len(m.group(0)), abc_text)


def extract_notes(abc_text: str) -> list[Note]:
    """Return every note token of the tune body in scan order.

    Args:
        abc_text: The original tune text.

    Returns:
        Notes with ``source_offset`` and ``raw_text`` set.
    """
    masked = mask_non_body(abc_text)
    logger.debug("Masked input:\n%s", masked)

    notes = [Note(m.start(), m.group(0)) for m in NOTE_PATTERN.finditer(masked)]
    logger.debug("Extracted %d notes", len(notes))
    return notes
