"""Errors shared by the command and report I/O. Internal."""

from typing import Optional


class ParseError(Exception):
    """An input line could not be understood.

    :param line: The offending line.
    :param line_no: 1-based number of the line in the input, if known.
    """
    def __init__(self, line: str, line_no: Optional[int] = None):
        self.line = line
        self.line_no = line_no
        message = f'invalid input line: {line!r}'
        if line_no is not None:
            message += f' (line {line_no})'
        super().__init__(message)
