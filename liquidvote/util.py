'''Various utility functions for other modules of liquidvote.

There should normally be no need to use these functions directly.
'''

import collections
from typing import Any, Dict, Hashable, List, Tuple


def count_values(d: Dict[Any, Hashable]) -> Dict[Hashable, int]:
    '''Count how many keys of the dictionary map to each of its values.'''
    return dict(collections.Counter(d.values()))


def sorted_counts(counts: Dict[str, int]) -> List[Tuple[str, int]]:
    '''Return counts items sorted by descending count, then ascending name.'''
    return list(sorted(counts.items(), key=lambda item: (-item[1], item[0])))

