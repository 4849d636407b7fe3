"""Read vote commands and write election reports in plain text.

Every input line holds a single vote command in one of the forms::

    Alice pick Pizza
    Bob delegate Alice

The verbs are case sensitive and may carry a third person ``s`` (``picks``,
``delegates``); names are case sensitive as well. A command without
the final name is an explicit invalid vote of the voter. Lines that do not
start with a voter name followed by a verb are skipped.

The report lists the alternatives with their vote counts in descending order
(ties broken alphabetically), followed by the number of invalid votes::

        2 Salad
        1 Pizza
        3 Invalid

Optionally, an open votes section lists the resolved choice of every voter.
"""

import dataclasses
import io
import re
import warnings
from typing import Dict, Iterable, Optional, TextIO

import liquidvote.io.core
from liquidvote.aggregate import Result
from liquidvote.democracy import LiquidDemocracy
from liquidvote.registry import INVALID


ACTIONS = ('pick', 'delegate')

RESULT_FORMAT = '    %4d %s'
OPEN_VOTE_FORMAT = '    %-15s -->  %15s'
INVALID_OPEN_VOTE_FORMAT = '  ! %-15s %21s'
INVALID_OPEN_VOTE_LABEL = '(invalid choice)'

COMMAND_RE = re.compile(
    r'^\s*(?P<voter>\S+)\s+(?P<action>' + '|'.join(ACTIONS) + r')s?'
    r'(?:\s+(?P<target>.*?))?\s*$'
)


class SkippedLineWarning(UserWarning):
    """An input line was not recognized as a command and was skipped."""
    pass


@dataclasses.dataclass(frozen=True)
class Command:
    """A single parsed vote command.

    :param voter: Name of the voter casting the vote.
    :param action: One of :data:`ACTIONS`.
    :param target: Name of the picked alternative or of the delegate voter;
        None for an explicit invalid vote.
    """
    voter: str
    action: str
    target: Optional[str] = None

    def __str__(self) -> str:
        parts = [self.voter, self.action]
        if self.target is not None:
            parts.append(self.target)
        return ' '.join(parts)


def parse_line(line: str) -> Optional[Command]:
    """Parse a single command line.

    :param line: The input line, with or without the trailing newline.
    :returns: The parsed command, or None if the line does not contain
        a voter name and a valid action.
    """
    match = COMMAND_RE.match(line)
    if match is None:
        return None
    return Command(
        voter=match.group('voter'),
        action=match.group('action'),
        target=(match.group('target') or None),
    )


def load_lines(lines: Iterable[str],
               democracy: Optional[LiquidDemocracy] = None,
               invalid_lines: str = 'warn',
               stop_at_blank: bool = True,
               ) -> LiquidDemocracy:
    """Cast the votes from the command lines.

    :param lines: Command lines.
    :param democracy: An election to cast the votes into. If None, a new
        election is created.
    :param invalid_lines: How to treat lines that are not valid commands:

        -   ``warn``: Skip the line, emitting a :class:`SkippedLineWarning`.
        -   ``ignore``: Skip the line silently.
        -   ``error``: Raise a :class:`liquidvote.io.core.ParseError`.

    :param stop_at_blank: Stop reading at the first blank line. This allows
        ending an interactive input session; trailing blank lines in files
        are harmless.
    :returns: The election with all votes cast.
    """
    if invalid_lines not in ('warn', 'ignore', 'error'):
        raise ValueError(f'invalid invalid_lines setting: {invalid_lines!r}')
    if democracy is None:
        democracy = LiquidDemocracy()
    for line_no, line in enumerate(lines, start=1):
        if not line.strip():
            if stop_at_blank:
                break
            else:
                continue
        command = parse_line(line)
        if command is None:
            if invalid_lines == 'error':
                raise liquidvote.io.core.ParseError(line.rstrip('\n'), line_no)
            elif invalid_lines == 'warn':
                warnings.warn(
                    f'invalid line {line_no}, skipping: {line.strip()!r}',
                    SkippedLineWarning,
                )
            continue
        democracy.apply(command)
    return democracy


def load(file: TextIO, **kwargs) -> LiquidDemocracy:
    """Cast the votes from a command file. See :func:`load_lines`."""
    return load_lines(file, **kwargs)


def loads(text: str, **kwargs) -> LiquidDemocracy:
    """Cast the votes from a command string. See :func:`load_lines`."""
    return load_lines(text.splitlines(), **kwargs)


def dump_lines(result: Result,
               choices: Optional[Dict[str, Optional[str]]] = None,
               ) -> Iterable[str]:
    """Produce the election report.

    :param result: Vote counts of the election.
    :param choices: Resolved choices of the voters, as returned by
        :meth:`LiquidDemocracy.resulting_choices`. If given, an open votes
        section listing them is appended.
    """
    for name, n_votes in result.ranked():
        yield RESULT_FORMAT % (n_votes, name)
    yield RESULT_FORMAT % (result.invalid, INVALID.label)
    if choices is not None:
        yield ''
        yield 'Open Votes:'
        for voter in sorted(choices):
            choice = choices[voter]
            if choice is None:
                yield INVALID_OPEN_VOTE_FORMAT % (
                    voter, INVALID_OPEN_VOTE_LABEL
                )
            else:
                yield OPEN_VOTE_FORMAT % (voter, choice)


def dump(file: TextIO,
         result: Result,
         choices: Optional[Dict[str, Optional[str]]] = None,
         ) -> None:
    """Write the election report to a file. See :func:`dump_lines`."""
    for line in dump_lines(result, choices=choices):
        file.write(line + '\n')


def dumps(result: Result,
          choices: Optional[Dict[str, Optional[str]]] = None,
          ) -> str:
    """Return the election report as a string. See :func:`dump_lines`."""
    buffer = io.StringIO()
    dump(buffer, result, choices=choices)
    return buffer.getvalue()
