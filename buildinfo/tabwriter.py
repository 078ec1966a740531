"""Tab-aligned text rendering.

Text is written as lines of tab-terminated cells. Consecutive lines that
share a cell in the same position form a column block; every cell in a block
is padded with spaces to the widest cell of the block plus ``padding``. The
text after the last tab of a line is not part of any column and is written
as-is, so a line without tabs ends every open block.
"""

from __future__ import annotations


class TabWriter:
    """Buffers tab-separated text and renders it with aligned columns.

    Usage:
        writer = TabWriter()
        writer.write("Build Hash:\\tabc123\\n")
        writer.write("Release Version:\\tv1.2.3\\n")
        text = writer.flush()
    """

    def __init__(self, minwidth: int = 0, padding: int = 1, padchar: str = " ") -> None:
        if minwidth < 0 or padding < 0:
            raise ValueError("minwidth and padding must not be negative")
        if len(padchar) != 1:
            raise ValueError("padchar must be a single character")
        self.minwidth = minwidth
        self.padding = padding
        self.padchar = padchar
        self._chunks: list[str] = []

    def write(self, text: str) -> int:
        self._chunks.append(text)
        return len(text)

    def flush(self) -> str:
        """Render everything written so far and reset the buffer."""
        text = "".join(self._chunks)
        self._chunks.clear()
        if not text:
            return ""

        raw_lines = text.split("\n")
        # Text ending in a newline leaves an empty trailing piece.
        terminated = raw_lines[-1] == ""
        if terminated:
            raw_lines.pop()
        lines = [line.split("\t") for line in raw_lines]

        out: list[str] = []
        self._format(lines, out, [], 0, len(lines))
        rendered = "\n".join(out)
        return rendered + "\n" if terminated else rendered

    def _format(self, lines: list[list[str]], out: list[str], widths: list[int],
                start: int, end: int) -> None:
        column = len(widths)
        row = start
        while row < end:
            if column >= len(lines[row]) - 1:
                row += 1
                continue
            self._write_lines(lines, out, widths, start, row)
            block_start = row
            width = self.minwidth
            while row < end and column < len(lines[row]) - 1:
                width = max(width, len(lines[row][column]) + self.padding)
                row += 1
            self._format(lines, out, widths + [width], block_start, row)
            start = row
        self._write_lines(lines, out, widths, start, end)

    def _write_lines(self, lines: list[list[str]], out: list[str], widths: list[int],
                     start: int, end: int) -> None:
        for cells in lines[start:end]:
            parts = []
            for index, cell in enumerate(cells):
                if index < len(widths) and index < len(cells) - 1:
                    parts.append(cell.ljust(widths[index], self.padchar))
                else:
                    parts.append(cell)
            out.append("".join(parts))


def align(text: str, minwidth: int = 0, padding: int = 1, padchar: str = " ") -> str:
    """Align tab-separated ``text`` in one pass."""
    writer = TabWriter(minwidth=minwidth, padding=padding, padchar=padchar)
    writer.write(text)
    return writer.flush()
