from __future__ import annotations

from bisect import bisect_right

from writing_guard.models import Location


class LineIndex:
    """Maps ``str`` offsets to 1-based line/column and to UTF-8 byte offsets."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._line_starts = [0]
        self._byte_starts = [0]
        byte_offset = 0
        previous = 0
        for index, char in enumerate(text):
            if char == "\n":
                byte_offset += len(text[previous:index + 1].encode("utf-8"))
                previous = index + 1
                self._line_starts.append(previous)
                self._byte_starts.append(byte_offset)

    def line_of(self, offset: int) -> int:
        return bisect_right(self._line_starts, offset)

    def location(self, offset: int) -> Location:
        line = self.line_of(offset)
        return Location(line=line, column=offset - self._line_starts[line - 1] + 1)

    def byte_offset(self, offset: int) -> int:
        line = self.line_of(offset)
        start = self._line_starts[line - 1]
        return self._byte_starts[line - 1] + len(self._text[start:offset].encode("utf-8"))
