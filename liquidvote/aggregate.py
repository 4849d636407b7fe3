'''Aggregation of resolved voter choices into election results.'''

import dataclasses
from typing import Dict, List, Tuple

import liquidvote.util
from liquidvote.registry import Alternative, OutcomeType, Voter


@dataclasses.dataclass
class Result:
    '''Vote counts of an election.

    The result is a snapshot; it does not change when further votes are cast.
    Like the dictionary of counts it holds, it is mutable and unhashable.

    :param choices: Numbers of votes for each alternative that received any,
        keyed by alternative name.
    :param invalid: Number of invalid votes (no choice, delegation cycles).
    '''
    choices: Dict[str, int]
    invalid: int = 0

    @property
    def total(self) -> int:
        '''Total number of votes, valid and invalid.'''
        return sum(self.choices.values()) + self.invalid

    def ranked(self) -> List[Tuple[str, int]]:
        '''Alternatives with their counts, most votes first.

        Ties are ordered by alternative name.
        '''
        return liquidvote.util.sorted_counts(self.choices)


def aggregate(resolution: Dict[Voter, OutcomeType]) -> Result:
    '''Count the votes for each alternative.

    :param resolution: Outcomes of all voters, as produced by
        :meth:`liquidvote.resolve.DelegationResolver.resolve`.
    '''
    choices = {}
    invalid = 0
    for outcome, n_votes in liquidvote.util.count_values(resolution).items():
        if isinstance(outcome, Alternative):
            choices[outcome.name] = n_votes
        else:
            invalid += n_votes
    return Result(choices, invalid)
