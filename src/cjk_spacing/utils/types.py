"""
Core types shared by the Markdown helpers and the spacing passes.

All offsets are character offsets into the *current* working string of a
pass. Ranges are recomputed for every pass and never carried across a pass
that changes the text length.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TextRange:
    """
    Half-open character interval ``[start, end)``.

    Args:
        start: Offset of the first character in the range
        end: Offset one past the last character in the range
    """

    start: int
    end: int

    def slice(self, text: str) -> str:
        return text[self.start : self.end]


@dataclass(frozen=True)
class BoldRange(TextRange):
    """
    Emphasis range tagged with its marker length.

    Args:
        marker_length: 1 for ``*``/``_`` markers, 2 for ``**``/``__`` markers
    """

    marker_length: int = 2


@dataclass(frozen=True)
class EmphasisReplacement:
    """
    One masked emphasis span.

    Args:
        placeholder: Opaque token that replaced the span in the working text
        value: The exact original span, markers included
    """

    placeholder: str
    value: str
