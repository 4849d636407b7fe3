'''Voters, alternatives and the registry holding them.

A liquid democracy election consists of two kinds of named nodes: voters
(:class:`Voter`), who either pick an alternative or delegate their vote to
another voter, and alternatives (:class:`Alternative`), which can only be
picked. Both are identified by their names only; names are case sensitive.

The :class:`Registry` is the single place where these nodes are created and
looked up. Nodes are created lazily on their first reference and are never
removed.

Voters whose choice cannot be resolved to a real alternative are assigned the
:data:`INVALID` sentinel. It is a distinct object that is never registered and
never equal to any alternative, not even one named ``Invalid``.
'''

from __future__ import annotations

from typing import Dict, Iterable, Optional, Set, Union


class NameRequiredError(ValueError):
    '''A voter or alternative was referenced without a name.

    :param role: What kind of node was missing its name (``voter`` or
        ``alternative``).
    :param name: The offending name value (None or an empty string).
    '''
    def __init__(self, role: str = 'voter', name: Optional[str] = None):
        self.role = role
        self.name = name
        super().__init__(f'{role} name required, got {name!r}')


class Alternative:
    '''An option that can be picked by voters.

    Two alternatives are equal if and only if their names are equal.

    :param name: Name of the alternative.
    '''
    __slots__ = ('name', )

    def __init__(self, name: str):
        self.name = name

    def __eq__(self, other) -> bool:
        return isinstance(other, Alternative) and self.name == other.name

    def __hash__(self) -> int:
        return hash((Alternative, self.name))

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f'<Alternative({self.name})>'


class InvalidChoice:
    '''The outcome of a vote that does not resolve to any alternative.

    There is a single instance, :data:`INVALID`. It has no name so it cannot
    collide with a real alternative; :attr:`label` is only used for display.
    '''
    __slots__ = ()
    label: str = 'Invalid'

    _instance: Optional[InvalidChoice] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (InvalidChoice, ())

    def __repr__(self) -> str:
        return '<INVALID>'


INVALID = InvalidChoice()

ChoiceType = Union[Alternative, 'Voter', None]
OutcomeType = Union[Alternative, InvalidChoice]


class Voter:
    '''A participant of the election.

    A voter holds at most one choice at a time: nothing (None), an
    :class:`Alternative` that they picked or another :class:`Voter` they
    delegated to. Setting a new choice replaces the previous one.

    Voters are equal if their names are equal.

    :param name: Name of the voter.
    :param choice: Initial choice of the voter.
    '''
    __slots__ = ('name', 'choice')

    def __init__(self, name: str, choice: ChoiceType = None):
        self.name = name
        self.choice = choice

    @property
    def has_picked(self) -> bool:
        '''Whether the voter currently picks an alternative directly.'''
        return isinstance(self.choice, Alternative)

    @property
    def is_delegating(self) -> bool:
        '''Whether the voter currently delegates to another voter.'''
        return isinstance(self.choice, Voter)

    def __eq__(self, other) -> bool:
        return isinstance(other, Voter) and self.name == other.name

    def __hash__(self) -> int:
        return hash((Voter, self.name))

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f'<Voter({self.name})>'


class Registry:
    '''All known voters and alternatives of an election, keyed by name.

    Lookups create the requested node if it does not exist yet, so the
    registry only ever grows.
    '''
    def __init__(self):
        self._voters: Dict[str, Voter] = {}
        self._alternatives: Dict[str, Alternative] = {}

    def voter(self, name: str) -> Voter:
        '''Return the voter with the given name, creating them if needed.

        :param name: Name of the voter.
        :raises NameRequiredError: If the name is None or empty.
        '''
        if not name:
            raise NameRequiredError('voter', name)
        try:
            return self._voters[name]
        except KeyError:
            voter = self._voters[name] = Voter(name)
            return voter

    def alternative(self, name: str) -> Alternative:
        '''Return the alternative with the given name, creating it if needed.

        :param name: Name of the alternative.
        :raises NameRequiredError: If the name is None or empty.
        '''
        if not name:
            raise NameRequiredError('alternative', name)
        try:
            return self._alternatives[name]
        except KeyError:
            alternative = self._alternatives[name] = Alternative(name)
            return alternative

    def voters(self) -> Iterable[Voter]:
        return self._voters.values()

    def voter_names(self) -> Set[str]:
        '''Return a snapshot of the names of all known voters.'''
        return set(self._voters)

    def alternative_names(self) -> Set[str]:
        '''Return a snapshot of the names of all known alternatives.'''
        return set(self._alternatives)

    def __len__(self) -> int:
        return len(self._voters)

    def __contains__(self, name: str) -> bool:
        return name in self._voters
