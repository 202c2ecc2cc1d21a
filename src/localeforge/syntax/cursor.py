"""Position tracking for the locale source parser.

A Cursor is a frozen (source, pos) pair. Rules never mutate it; each step
returns a new cursor, so a failed alternative simply discards what it built
and the caller retries from its own cursor.

Line and column are only needed for diagnostics and are computed on demand.
Only ``\\n`` counts as a line break for positions; a ``\\r`` before it is
ordinary text to the position arithmetic.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass, field

from localeforge.diagnostics import ErrorTemplate, SourceSpan

__all__ = ["Cursor", "ParseError", "ParseResult"]

_LINE_ENDS = "\n\r"


@dataclass(frozen=True, slots=True)
class Cursor:
    """Read position inside one locale source.

    Example:
        >>> cursor = Cursor("LC_TIME", 0)
        >>> cursor.current, cursor.advance().current
        ('L', 'C')
        >>> Cursor("hi", 2).is_eof
        True
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Character under the cursor.

        Raises:
            EOFError: At end of input; rules check is_eof first
        """
        if self.pos >= len(self.source):
            raise EOFError(ErrorTemplate.unexpected_eof(self.pos).message)
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> str | None:
        """Character offset positions ahead, None past the end."""
        index = self.pos + offset
        return self.source[index] if index < len(self.source) else None

    def advance(self, count: int = 1) -> "Cursor":
        """Cursor count characters further on, stopping at end of input."""
        return Cursor(self.source, min(self.pos + count, len(self.source)))

    def slice_to(self, end_pos: int) -> str:
        return self.source[self.pos : end_pos]

    def slice_ahead(self, n: int) -> str:
        """Up to n characters from here; fewer near the end."""
        return self.source[self.pos : self.pos + n]

    def startswith(self, text: str) -> bool:
        return self.source.startswith(text, self.pos)

    def skip_while(self, chars: str) -> "Cursor":
        """Cursor after the run of characters from chars starting here."""
        end = self.pos
        while end < len(self.source) and self.source[end] in chars:
            end += 1
        return Cursor(self.source, end)

    def skip_to_line_end(self) -> "Cursor":
        """Cursor on the next CR or LF (not past it), or at end of input."""
        end = self.pos
        while end < len(self.source) and self.source[end] not in _LINE_ENDS:
            end += 1
        return Cursor(self.source, end)

    def compute_line_col(self) -> tuple[int, int]:
        """1-based (line, column) of this position.

        Example:
            >>> Cursor("LC_TIME\\nEND LC_TIME", 8).compute_line_col()
            (2, 1)
        """
        line_start = self.source.rfind("\n", 0, self.pos) + 1
        return self.source.count("\n", 0, line_start) + 1, self.pos - line_start + 1

    def to_span(self) -> SourceSpan:
        """Empty SourceSpan located here."""
        line, column = self.compute_line_col()
        return SourceSpan(start=self.pos, end=self.pos, line=line, column=column)


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """A matched value and the cursor just after it.

    Grammar rules return ``ParseResult[X] | None``: None means the alternative
    does not apply here. Errors that abort the whole file are raised as
    LocaleSyntaxError instead.
    """

    value: T
    cursor: Cursor


@dataclass(frozen=True, slots=True)
class ParseError:
    """Where and why a parse stopped.

    Example:
        >>> ParseError("Expected 'END LC_TIME'", Cursor("LC_TIME\\nx", 8)).format_error()
        "2:1: Expected 'END LC_TIME'"
    """

    message: str
    cursor: Cursor
    expected: tuple[str, ...] = field(default_factory=tuple)

    def format_error(self) -> str:
        """``line:column: message``, followed by the expected tokens if any."""
        line, column = self.cursor.compute_line_col()
        text = f"{line}:{column}: {self.message}"
        if self.expected:
            text += " (expected: " + ", ".join(f"'{token}'" for token in self.expected) + ")"
        return text

    def format_with_context(self, context_lines: int = 2) -> str:
        """format_error() plus the surrounding source lines and a caret.

        Example:
            >>> source = "LC_TIME\\nd_fmt \\"%d\\nEND LC_TIME"
            >>> print(ParseError("Unterminated string literal", Cursor(source, 14)).format_with_context())
            2:7: Unterminated string literal
            <BLANKLINE>
               1 | LC_TIME
               2 | d_fmt "%d
                 |       ^
               3 | END LC_TIME
        """
        line, column = self.cursor.compute_line_col()
        source_lines = self.cursor.source.split("\n")
        first = max(1, line - context_lines)
        last = min(len(source_lines), line + context_lines)

        output = [self.format_error(), ""]
        for number in range(first, last + 1):
            output.append(f"{number:4} | {source_lines[number - 1]}")
            if number == line:
                output.append(f"{'':4} | {' ' * (column - 1)}^")
        return "\n".join(output)
