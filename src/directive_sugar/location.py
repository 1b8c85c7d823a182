"""Source positions carried by AST nodes.

Directive nodes keep the position the upstream parser reported so that a
resolution error can name the offending markup as ``file:line:column``.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Where a node starts (and optionally ends) in the markdown source.

    Lines and columns count from 1. Line 0 marks a node a resolver made
    up (a generated ``figcaption``, a link icon) rather than one read
    from the document.

    Examples:
            >>> loc = SourceLocation(3, 5, source_file="docs/guide.md")
            >>> str(loc)
            'docs/guide.md:3:5'
            >>> SourceLocation.unknown().is_known
            False

    """

    lineno: int
    col_offset: int
    end_lineno: int | None = None
    end_col_offset: int | None = None
    source_file: str | None = None

    def __str__(self) -> str:
        position = f"{self.lineno}:{self.col_offset}"
        return f"{self.source_file}:{position}" if self.source_file else position

    @property
    def is_known(self) -> bool:
        """True when the location came from real source text."""
        return self.lineno > 0

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Placeholder for synthetic nodes."""
        return cls(0, 0)
