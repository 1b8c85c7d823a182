"""StringBuilder for HTML output.

Collects fragments in a list and joins them once when the render is done.

Thread Safety:
Instances are local to each render() call.

"""

from __future__ import annotations


class StringBuilder:
    """Append-only string accumulator.

    Usage:
            >>> sb = StringBuilder()
            >>> _ = sb.append("<span>").append("NEW").append("</span>")
            >>> sb.build()
            '<span>NEW</span>'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append ``s`` (empty strings are skipped); returns self for chaining."""
        if s:
            self._parts.append(s)
        return self

    def append_line(self, s: str = "") -> StringBuilder:
        """Append ``s`` followed by a newline."""
        if s:
            self._parts.append(s)
        self._parts.append("\n")
        return self

    def build(self) -> str:
        return "".join(self._parts)

    def __bool__(self) -> bool:
        return bool(self._parts)
