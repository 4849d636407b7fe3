"""Liquidvote - a library for counting liquid democracy elections.

In a liquid democracy, every voter either picks one of the alternatives
directly or delegates their vote to another voter, who may delegate it
further. A vote counts for the alternative at the end of its delegation
chain; votes whose chain ends without a pick or runs in a cycle are invalid.

The library is structured as follows:

-   The ``registry`` module defines voters, alternatives and the registry
    that creates and looks them up by name.
-   The ``resolve`` module follows delegation chains to find the alternative
    each voter ultimately supports, detecting cycles.
-   The ``aggregate`` module counts the resolved votes.
-   The ``democracy`` module ties these together in
    :class:`LiquidDemocracy`, the object through which votes are cast and
    results obtained.
-   The ``io`` subpackage reads text vote commands and writes result
    reports; ``python -m liquidvote`` does both from the command line.
"""
