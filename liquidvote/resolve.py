'''Resolution of delegation chains to the alternatives voters support.

Every voter's choice is followed through the delegation chain until an
alternative is found (the voter supports it), the chain ends without a choice
or returns to a voter already on the chain (the vote is invalid). The
:class:`DelegationResolver` computes this for all voters of a registry at once
and caches the result until it is invalidated.
'''

import logging
from typing import Dict, List, Optional, Set, Tuple

from liquidvote.registry import (
    INVALID, OutcomeType, Registry, Voter
)


logger = logging.getLogger(__name__)


class DelegationResolver:
    '''Resolve the final alternatives of all voters in a registry.

    The chains are walked iteratively. Voters encountered on a walk form
    a frontier that is assigned its outcome in one go once the walk ends:

    -   on an alternative, all of them support that alternative,
    -   on an empty choice, all of them are invalid,
    -   on a voter already in the frontier (a cycle, including delegating to
        oneself), all of them are invalid,
    -   on a voter resolved by an earlier walk, all of them share that voter's
        outcome.

    Each voter is therefore visited once per resolution, and the chain length
    is not limited by the interpreter stack.

    The resolution is cached; call :meth:`invalidate` whenever any voter's
    choice changes or a voter is added.

    :param registry: The registry whose voters to resolve.
    '''
    def __init__(self, registry: Registry):
        self.registry = registry
        self._resolution: Dict[Voter, OutcomeType] = {}
        self._dirty = True

    @property
    def is_dirty(self) -> bool:
        '''Whether the cached resolution is outdated.'''
        return self._dirty

    def invalidate(self) -> None:
        '''Mark the cached resolution as outdated.'''
        self._dirty = True

    def resolve(self) -> Dict[Voter, OutcomeType]:
        '''Return the outcome for every known voter.

        :returns: A new dictionary mapping each voter to the
            :class:`Alternative` they ultimately support or to
            :data:`INVALID`.
        '''
        if self._dirty:
            self._resolution = self._compute()
            self._dirty = False
        return dict(self._resolution)

    def _compute(self) -> Dict[Voter, OutcomeType]:
        logger.debug('resolving choices of %d voters', len(self.registry))
        resolution = {}
        n_cycles = 0
        for voter in self.registry.voters():
            if voter in resolution:
                continue
            frontier, outcome = self._walk(voter, resolution)
            if outcome is None:
                n_cycles += 1
                logger.debug('delegation cycle among %s', frontier)
                outcome = INVALID
            for member in frontier:
                resolution[member] = outcome
        n_invalid = sum(1 for out in resolution.values() if out is INVALID)
        logger.info(
            '%d voters resolved, %d invalid, %d delegation cycles',
            len(resolution), n_invalid, n_cycles
        )
        return resolution

    @staticmethod
    def _walk(start: Voter,
              resolution: Dict[Voter, OutcomeType],
              ) -> Tuple[List[Voter], Optional[OutcomeType]]:
        # Returns the frontier and its outcome; None outcome signals a cycle.
        frontier = [start]
        on_chain: Set[Voter] = {start}
        current = start
        while True:
            if current.has_picked:
                return frontier, current.choice
            elif not current.is_delegating:
                return frontier, INVALID
            delegate = current.choice
            if delegate in on_chain:
                return frontier, None
            elif delegate in resolution:
                return frontier, resolution[delegate]
            frontier.append(delegate)
            on_chain.add(delegate)
            current = delegate
