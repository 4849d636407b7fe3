import sys
import os
import random
import logging

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from liquidvote.registry import Alternative, INVALID, Registry
from liquidvote.resolve import DelegationResolver


def build(edges):
    '''Create a registry from (voter, kind, target) triples.

    Kind is 'pick', 'delegate' or None for no choice.
    '''
    registry = Registry()
    for voter, kind, target in edges:
        node = registry.voter(voter)
        if kind == 'pick':
            node.choice = registry.alternative(target)
        elif kind == 'delegate':
            node.choice = registry.voter(target)
    return registry


def named(resolution):
    return {
        voter.name: (None if outcome is INVALID else outcome.name)
        for voter, outcome in resolution.items()
    }


EXAMPLE_EDGES = [
    ('Alice', 'pick', 'Pizza'),
    ('Bob', 'delegate', 'Carol'),
    ('Carol', 'pick', 'Salad'),
    ('Dave', 'delegate', 'Eve'),
    ('Eve', 'delegate', 'Mallory'),
    ('Mallory', 'delegate', 'Eve'),
]
EXAMPLE_RESOLVED = {
    'Alice': 'Pizza',
    'Bob': 'Salad',
    'Carol': 'Salad',
    'Dave': None,
    'Eve': None,
    'Mallory': None,
}


def test_example():
    resolver = DelegationResolver(build(EXAMPLE_EDGES))
    assert named(resolver.resolve()) == EXAMPLE_RESOLVED


@pytest.mark.parametrize('seed', [0, 1, 2, 3, 4])
def test_order_insensitive(seed):
    edges = list(EXAMPLE_EDGES)
    random.Random(seed).shuffle(edges)
    resolver = DelegationResolver(build(edges))
    assert named(resolver.resolve()) == EXAMPLE_RESOLVED


def test_self_delegation():
    resolver = DelegationResolver(build([('A', 'delegate', 'A')]))
    assert named(resolver.resolve()) == {'A': None}


def test_no_choice_invalid():
    resolver = DelegationResolver(build([
        ('A', None, None),
        ('B', 'delegate', 'A'),
    ]))
    assert named(resolver.resolve()) == {'A': None, 'B': None}


def test_chain_into_cycle():
    resolver = DelegationResolver(build([
        ('A', 'delegate', 'B'),
        ('B', 'delegate', 'C'),
        ('C', 'delegate', 'D'),
        ('D', 'delegate', 'B'),
        ('E', 'delegate', 'A'),
    ]))
    assert set(resolver.resolve().values()) == {INVALID}


def test_branches_share_resolution():
    resolver = DelegationResolver(build([
        ('Root', 'pick', 'X'),
        ('L1', 'delegate', 'Root'),
        ('L2', 'delegate', 'L1'),
        ('R1', 'delegate', 'Root'),
        ('R2', 'delegate', 'R1'),
        ('R3', 'delegate', 'L2'),
    ]))
    assert set(named(resolver.resolve()).values()) == {'X'}


def test_long_chain_into_cycle():
    n_voters = 5000
    edges = [
        (f'A {i}', 'delegate', f'A {i + 1}') for i in range(n_voters - 1)
    ]
    edges.append((f'A {n_voters - 1}', 'delegate', f'A {n_voters - 2}'))
    registry = build(edges)
    resolver = DelegationResolver(registry)
    resolution = resolver.resolve()
    assert len(resolution) == n_voters
    assert set(resolution.values()) == {INVALID}
    registry.voter(f'A {n_voters - 1}').choice = registry.alternative('Apple')
    resolver.invalidate()
    assert set(resolver.resolve().values()) == {Alternative('Apple')}


def chain_registry(n_voters, from_end, ending='pick'):
    '''Create a chain V n-1 -> ... -> V 0 ending in a pick or a cycle.

    If from_end, voters are registered starting from V 0.
    '''
    registry = Registry()
    order = range(n_voters) if from_end else reversed(range(n_voters))
    for i in order:
        voter = registry.voter(f'V {i}')
        if i > 0:
            voter.choice = registry.voter(f'V {i - 1}')
        elif ending == 'pick':
            voter.choice = registry.alternative('End')
        else:
            voter.choice = registry.voter('V 1')
    return registry


def test_long_chain_reversed_order():
    registry = chain_registry(2000, from_end=True)
    resolution = DelegationResolver(registry).resolve()
    assert set(resolution.values()) == {Alternative('End')}


@pytest.mark.parametrize('ending', ['pick', 'cycle'])
@pytest.mark.parametrize('from_end', [True, False])
def test_each_voter_walked_once(monkeypatch, from_end, ending):
    n_voters = 3000
    walked = []
    walk = DelegationResolver._walk

    def counting_walk(start, resolution):
        frontier, outcome = walk(start, resolution)
        walked.extend(frontier)
        return frontier, outcome

    monkeypatch.setattr(
        DelegationResolver, '_walk', staticmethod(counting_walk)
    )
    registry = chain_registry(n_voters, from_end=from_end, ending=ending)
    resolution = DelegationResolver(registry).resolve()
    assert len(resolution) == n_voters
    assert len(walked) == n_voters
    assert set(walked) == set(resolution)


def test_cache_until_invalidated():
    registry = build([('A', 'pick', 'X')])
    resolver = DelegationResolver(registry)
    assert resolver.is_dirty
    first = resolver.resolve()
    assert not resolver.is_dirty
    registry.voter('A').choice = registry.alternative('Y')
    # not invalidated, stale result is kept
    assert named(resolver.resolve()) == {'A': 'X'}
    resolver.invalidate()
    assert resolver.is_dirty
    assert named(resolver.resolve()) == {'A': 'Y'}
    assert named(first) == {'A': 'X'}


def test_resolve_idempotent():
    resolver = DelegationResolver(build(EXAMPLE_EDGES))
    assert resolver.resolve() == resolver.resolve()


def test_resolve_returns_copy():
    resolver = DelegationResolver(build(EXAMPLE_EDGES))
    resolver.resolve().clear()
    assert len(resolver.resolve()) == len(EXAMPLE_EDGES)


def test_empty_registry():
    assert DelegationResolver(Registry()).resolve() == {}


def test_logs_cycles(caplog):
    resolver = DelegationResolver(build(EXAMPLE_EDGES))
    with caplog.at_level(logging.DEBUG, logger='liquidvote.resolve'):
        resolver.resolve()
    assert 'delegation cycle' in caplog.text
    assert '6 voters resolved, 3 invalid, 1 delegation cycles' in caplog.text
