'''The liquid democracy election: casting votes and obtaining results.

:class:`LiquidDemocracy` is the entry point of the library. Voters cast their
votes by picking an alternative or delegating to another voter; only the last
vote of every voter counts. Results can be queried at any time and reflect all
votes cast so far::

    >>> election = LiquidDemocracy()
    >>> election.pick('Alice', 'Pizza')
    >>> election.delegate('Bob', 'Alice')
    >>> election.results()
    Result(choices={'Pizza': 2}, invalid=0)
'''

from __future__ import annotations

import logging
from typing import Dict, Optional, Set, TYPE_CHECKING

from liquidvote.aggregate import Result, aggregate
from liquidvote.registry import Alternative, Registry
from liquidvote.resolve import DelegationResolver

if TYPE_CHECKING:
    from liquidvote.io.commands import Command


logger = logging.getLogger(__name__)


class LiquidDemocracy:
    '''A single liquid democracy election.

    Voters and alternatives are registered when first mentioned. A vote with
    no alternative or delegate given is accepted as an explicit invalid vote.
    '''
    def __init__(self):
        self.registry = Registry()
        self.resolver = DelegationResolver(self.registry)

    def pick(self, voter: str, alternative: Optional[str] = None) -> None:
        '''Cast a direct vote for an alternative.

        :param voter: Name of the voter.
        :param alternative: Name of the picked alternative. If None or empty,
            the voter is registered with an invalid vote.
        :raises NameRequiredError: If the voter name is None or empty.
        '''
        voter_node = self.registry.voter(voter)
        if alternative:
            voter_node.choice = self.registry.alternative(alternative)
            logger.debug('%s picks %s', voter, alternative)
        else:
            logger.info('%s made no pick, vote is invalid', voter)
        self.resolver.invalidate()

    def delegate(self, voter: str, delegate: Optional[str] = None) -> None:
        '''Delegate a vote to another voter.

        :param voter: Name of the delegating voter.
        :param delegate: Name of the voter receiving the vote. If None or
            empty, the voter is registered with an invalid vote.
        :raises NameRequiredError: If the voter name is None or empty.
        '''
        voter_node = self.registry.voter(voter)
        if delegate:
            voter_node.choice = self.registry.voter(delegate)
            logger.debug('%s delegates to %s', voter, delegate)
        else:
            logger.info('%s delegated to nobody, vote is invalid', voter)
        self.resolver.invalidate()

    def apply(self, command: Command) -> None:
        '''Cast a vote described by a parsed input command.'''
        if command.action == 'pick':
            self.pick(command.voter, command.target)
        elif command.action == 'delegate':
            self.delegate(command.voter, command.target)
        else:
            raise ValueError(f'unknown vote action: {command.action!r}')

    def resulting_choices(self) -> Dict[str, Optional[str]]:
        '''Return the alternative every voter ultimately supports.

        :returns: A dictionary mapping voter names to names of alternatives,
            or to None for voters whose vote is invalid.
        '''
        return {
            voter.name: (
                outcome.name if isinstance(outcome, Alternative) else None
            )
            for voter, outcome in self.resolver.resolve().items()
        }

    def results(self) -> Result:
        '''Count the votes for all alternatives and the invalid votes.'''
        return aggregate(self.resolver.resolve())

    def voter_names(self) -> Set[str]:
        return self.registry.voter_names()

    def alternative_names(self) -> Set[str]:
        return self.registry.alternative_names()

    def __len__(self) -> int:
        return len(self.registry)
