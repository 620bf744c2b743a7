"""Caret model for editing a text node's lines.

The caret is a (line, char) index into the node's line list. Every
operation leaves it inside the buffer:

    0 <= line < len(lines)
    0 <= char <= len(lines[line])

Operations at buffer edges (backspace at the very start, left at the very
start, right at the very end) are no-ops.
"""

from dataclasses import dataclass


@dataclass
class CaretPosition:
    line: int = 0
    char: int = 0

    def __iter__(self):
        return iter((self.line, self.char))


class TextCaret:
    """Line buffer editing for one TextNode.

    Mutations go through node.set_lines() so the node's measured width is
    recomputed on the next bounds query.
    """

    def __init__(self, node):
        self.node = node
        if not node.lines:
            node.set_lines([""])
        self.position = CaretPosition()

    @property
    def lines(self):
        return self.node.lines

    @property
    def line(self):
        return self.position.line

    @property
    def char(self):
        return self.position.char

    def _commit(self, lines):
        self.node.set_lines(lines)

    def _clamp(self):
        if not self.node.lines:
            self.node.set_lines([""])
        lines = self.lines
        line = max(0, min(self.position.line, len(lines) - 1))
        char = max(0, min(self.position.char, len(lines[line])))
        self.position = CaretPosition(line, char)

    def _current(self):
        """Position clamped to the node's current lines."""
        self._clamp()
        return self.position

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def move_to(self, line, char):
        self.position = CaretPosition(line, char)
        self._clamp()

    def move_to_end(self):
        """Caret after the last character of the last line."""
        last = len(self.lines) - 1
        self.position = CaretPosition(last, len(self.lines[last]))

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def insert_char(self, ch):
        """Insert a single printable character and advance one column."""
        line, char = self._current()
        lines = list(self.lines)
        current = lines[line]
        lines[line] = current[:char] + ch + current[char:]
        self._commit(lines)
        self.position = CaretPosition(line, char + len(ch))

    def break_line(self):
        """Split the current line at the caret; caret to start of the new line."""
        line, char = self._current()
        lines = list(self.lines)
        current = lines[line]
        lines[line] = current[:char]
        lines.insert(line + 1, current[char:])
        self._commit(lines)
        self.position = CaretPosition(line + 1, 0)

    def backspace(self):
        """Delete before the caret, merging with the previous line at column 0."""
        line, char = self._current()
        lines = list(self.lines)
        if char > 0:
            current = lines[line]
            lines[line] = current[:char - 1] + current[char:]
            self._commit(lines)
            self.position = CaretPosition(line, char - 1)
        elif line > 0:
            removed = lines.pop(line)
            previous = lines[line - 1]
            lines[line - 1] = previous + removed
            self._commit(lines)
            self.position = CaretPosition(line - 1, len(previous))

    def delete_forward(self):
        """Delete after the caret, pulling the next line up at line end."""
        line, char = self._current()
        lines = list(self.lines)
        current = lines[line]
        if char < len(current):
            lines[line] = current[:char] + current[char + 1:]
            self._commit(lines)
        elif line < len(lines) - 1:
            lines[line] = current + lines.pop(line + 1)
            self._commit(lines)

    def paste(self, text):
        """Insert a block that may span several lines."""
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        for i, chunk in enumerate(text.split("\n")):
            if i > 0:
                self.break_line()
            if chunk:
                self._insert_chunk(chunk)

    def _insert_chunk(self, chunk):
        line, char = self._current()
        lines = list(self.lines)
        current = lines[line]
        lines[line] = current[:char] + chunk + current[char:]
        self._commit(lines)
        self.position = CaretPosition(line, char + len(chunk))

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def move_left(self):
        line, char = self._current()
        if char > 0:
            self.position = CaretPosition(line, char - 1)
        elif line > 0:
            self.position = CaretPosition(line - 1, len(self.lines[line - 1]))

    def move_right(self):
        line, char = self._current()
        if char < len(self.lines[line]):
            self.position = CaretPosition(line, char + 1)
        elif line < len(self.lines) - 1:
            self.position = CaretPosition(line + 1, 0)

    def move_up(self):
        line, char = self._current()
        if line > 0:
            self.position = CaretPosition(line - 1, min(char, len(self.lines[line - 1])))

    def move_down(self):
        line, char = self._current()
        if line < len(self.lines) - 1:
            self.position = CaretPosition(line + 1, min(char, len(self.lines[line + 1])))

    def move_home(self):
        self.position = CaretPosition(self._current().line, 0)

    def move_end(self):
        line = self._current().line
        self.position = CaretPosition(line, len(self.lines[line]))
