import sys
import collections.abc
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from liquidvote.aggregate import Result, aggregate
from liquidvote.registry import Alternative, INVALID, Voter


def test_aggregate_groups():
    pizza = Alternative('Pizza')
    salad = Alternative('Salad')
    result = aggregate({
        Voter('Alice'): pizza,
        Voter('Bob'): salad,
        Voter('Carol'): salad,
        Voter('Dave'): INVALID,
        Voter('Eve'): INVALID,
        Voter('Mallory'): INVALID,
    })
    assert result == Result({'Salad': 2, 'Pizza': 1}, 3)
    assert result.total == 6


def test_aggregate_empty():
    result = aggregate({})
    assert result.choices == {}
    assert result.invalid == 0
    assert result.total == 0


def test_alternative_named_invalid_kept_apart():
    result = aggregate({
        Voter('Alice'): Alternative('Invalid'),
        Voter('Bob'): INVALID,
        Voter('Carol'): INVALID,
    })
    assert result.choices == {'Invalid': 1}
    assert result.invalid == 2


def test_zero_vote_alternatives_omitted():
    result = aggregate({Voter('Alice'): INVALID})
    assert result.choices == {}
    assert result.invalid == 1


@pytest.mark.parametrize(('choices', 'expected'), [
    ({'Salad': 2, 'Pizza': 1}, [('Salad', 2), ('Pizza', 1)]),
    ({'Salad': 2, 'Pizza': 2}, [('Pizza', 2), ('Salad', 2)]),
    (
        {'b': 1, 'a': 1, 'C': 3, 'c': 3},
        [('C', 3), ('c', 3), ('a', 1), ('b', 1)]
    ),
    ({}, []),
])
def test_ranked(choices, expected):
    assert Result(choices, 5).ranked() == expected


def test_result_unhashable_mutable_snapshot():
    result = Result({'Pizza': 1}, 0)
    assert not isinstance(result, collections.abc.Hashable)
    with pytest.raises(TypeError):
        hash(result)
    assert result == Result({'Pizza': 1}, 0)
