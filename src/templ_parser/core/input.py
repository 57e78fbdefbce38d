from bisect import bisect_right
from itertools import accumulate

from templ_parser.models import Position


class Input:
    """A backtracking cursor over template source.

    The cursor moves in code points. Save and restore with ``index()`` and
    ``seek()``. Positions report the UTF-8 byte offset, with the column
    counted in code points.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._index = 0
        self._line_starts = [0] + [i + 1 for i, c in enumerate(source) if c == "\n"]
        self._byte_offsets = list(accumulate((len(c.encode("utf-8")) for c in source), initial=0))

    def peek(self, n: int) -> str:
        """Return up to ``n`` characters without consuming them; ``n < 0`` returns the remainder."""
        if n < 0:
            return self._source[self._index :]
        return self._source[self._index : self._index + n]

    def take(self, n: int) -> tuple[str, bool]:
        if self._index + n > len(self._source):
            return "", False
        text = self._source[self._index : self._index + n]
        self._index += n
        return text, True

    def index(self) -> int:
        return self._index

    def seek(self, index: int) -> None:
        self._index = max(0, min(index, len(self._source)))

    def position(self) -> Position:
        return self.position_at(self._index)

    def position_at(self, index: int) -> Position:
        line = bisect_right(self._line_starts, index) - 1
        return Position(index=self._byte_offsets[index], line=line, col=index - self._line_starts[line])
