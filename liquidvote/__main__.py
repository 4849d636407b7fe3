"""A commandline tool for counting liquid democracy elections.

Reads vote commands (``<voter> pick <alternative>`` or
``<voter> delegate <voter>``, one per line) and prints the number of votes
for each alternative and the number of invalid votes.
"""

import argparse
import io
import logging
import sys
import warnings

import liquidvote.io.commands
from liquidvote.democracy import LiquidDemocracy

argparser = argparse.ArgumentParser(
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
argparser.add_argument(
    '-i', '--input-file',
    type=argparse.FileType('r', encoding='utf8'),
    help='file to load vote commands from',
)
argparser.add_argument(
    '-I', '--use-stdin',
    action='store_true',
    help='load vote commands from standard input',
)
argparser.add_argument(
    '-o', '--open',
    dest='open_votes',
    action='store_true',
    help='also show the resolved choice of every voter',
)
argparser.add_argument(
    '-a', '--read-all',
    action='store_true',
    help='do not stop reading at the first blank line',
)
argparser.add_argument(
    '-s', '--strict',
    action='store_true',
    help='fail on unrecognized input lines instead of skipping them',
)
argparser.add_argument(
    '-v', '--verbose',
    action='store_true',
    help='show all log messages of the vote count',
)
argparser.add_argument(
    '-q', '--quiet',
    action='store_true',
    help='do not show any log messages or other info',
)


def main(input_file: io.TextIOBase,
         use_stdin: bool = False,
         open_votes: bool = False,
         read_all: bool = False,
         strict: bool = False,
         verbose: bool = False,
         quiet: bool = False,
         ) -> None:
    logging.basicConfig(
        level=(
            logging.DEBUG if verbose
            else (logging.WARNING if quiet else logging.INFO)
        ),
        format='%(levelname)-10s %(message)s'
    )
    if use_stdin:
        input_file = sys.stdin
    democracy = load_votes(input_file, read_all=read_all, strict=strict)
    if not len(democracy):
        warnings.warn('no votes cast, reporting empty results')
    show_report(democracy, open_votes=open_votes)


def load_votes(input_file: io.TextIOBase,
               read_all: bool = False,
               strict: bool = False,
               ) -> LiquidDemocracy:
    """Cast the votes from the given command file."""
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter(
            'always', liquidvote.io.commands.SkippedLineWarning
        )
        democracy = liquidvote.io.commands.load(
            input_file,
            invalid_lines=('error' if strict else 'warn'),
            stop_at_blank=not read_all,
        )
    for warning in caught:
        print(f'[Warning] {warning.message}', file=sys.stderr)
    if caught:
        # free line between the warnings and the report
        print()
    return democracy


def show_report(democracy: LiquidDemocracy, open_votes: bool = False) -> None:
    """Print the vote counts and optionally the resolved choices."""
    liquidvote.io.commands.dump(
        sys.stdout,
        democracy.results(),
        choices=(democracy.resulting_choices() if open_votes else None),
    )


if __name__ == '__main__':
    args = argparser.parse_args()
    if not args.input_file and not args.use_stdin:
        argparser.print_usage()
    else:
        main(**vars(args))
