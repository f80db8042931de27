# policies.py

"""
Page replacement policies.

Each algorithm is its own class carrying only the bookkeeping it needs:
    - FIFOPolicy:    queue of resident pages in load order
    - LRUPolicy:     recency list, least recently used at the head
    - OptimalPolicy: precomputed future-occurrence index (read-only)
    - ClockPolicy:   reference flags plus a rotating pointer

All four expose the same three operations, which is all the simulator
calls:
    select_victim(frames, step) -> page to evict (frames are full)
    record_access(page, is_hit)  -> update after a hit or a load
    snapshot()                   -> frozen copy of the current state
"""

from bisect import bisect_right
from collections import OrderedDict, deque
from dataclasses import dataclass, field
from math import inf
from types import MappingProxyType
from typing import Dict, List, Mapping, Sequence, Tuple, Union


# =============================================================================
# STATE SNAPSHOTS - one frozen value type per policy
# =============================================================================

@dataclass(frozen=True)
class FIFOState:
    """Load order of resident pages, oldest first."""
    queue: Tuple[int, ...]


@dataclass(frozen=True)
class LRUState:
    """Resident pages by recency, least recently used first."""
    recency: Tuple[int, ...]


@dataclass(frozen=True)
class OptimalState:
    """Page -> ascending positions where it occurs in the reference string."""
    # Mappings are unhashable; equality still compares them
    future_references: Mapping[int, Tuple[int, ...]] = field(hash=False)


@dataclass(frozen=True)
class ClockState:
    """Reference flag per page seen so far, and the clock hand position."""
    reference_flags: Mapping[int, bool] = field(hash=False)
    pointer: int


PolicyState = Union[FIFOState, LRUState, OptimalState, ClockState]


# =============================================================================
# POLICIES
# =============================================================================

class FIFOPolicy:
    name = "fifo"

    def __init__(self):
        self.queue: deque = deque()

    def select_victim(self, frames: Sequence[int], step: int) -> int:
        return self.queue.popleft()

    def record_access(self, page: int, is_hit: bool):
        # Hits never reorder a FIFO queue
        if not is_hit:
            self.queue.append(page)

    def snapshot(self) -> FIFOState:
        return FIFOState(tuple(self.queue))


class LRUPolicy:
    name = "lru"

    def __init__(self):
        self.recency: "OrderedDict[int, None]" = OrderedDict()

    def select_victim(self, frames: Sequence[int], step: int) -> int:
        page, _ = self.recency.popitem(last=False)
        return page

    def record_access(self, page: int, is_hit: bool):
        # Hit or load, the page becomes most recently used
        self.recency.pop(page, None)
        self.recency[page] = None

    def snapshot(self) -> LRUState:
        return LRUState(tuple(self.recency))


class OptimalPolicy:
    """
    Belady's optimal replacement: evict the resident page whose next use
    lies furthest in the future (or never comes).

    Ties, including several pages that never recur, go to the first such
    page in frame order.
    """
    name = "optimal"

    def __init__(self, references: Sequence[int]):
        self.future_references = build_future_references(references)
        # The index is static, so every step can share one snapshot
        self._snapshot = OptimalState(self.future_references)

    def next_use(self, page: int, step: int) -> float:
        """
        Position of the next reference to `page` strictly after `step`.

        Returns:
            float: The index as a number, or math.inf if it never recurs.
        """
        positions = self.future_references.get(page, ())
        i = bisect_right(positions, step)
        if i < len(positions):
            return positions[i]
        return inf

    def select_victim(self, frames: Sequence[int], step: int) -> int:
        victim = frames[0]
        farthest = step
        for page in frames:
            next_index = self.next_use(page, step)
            if next_index > farthest:
                farthest = next_index
                victim = page
        return victim

    def record_access(self, page: int, is_hit: bool):
        pass

    def snapshot(self) -> OptimalState:
        return self._snapshot


class ClockPolicy:
    """
    Second-chance replacement over the frame slots.

    Accessing a page sets its reference flag. On replacement the hand
    sweeps the slots: a set flag is cleared and skipped, the first clear
    flag is the victim. The hand is left on the slot after the victim.
    """
    name = "clock"

    def __init__(self):
        self.reference_flags: Dict[int, bool] = {}
        self.pointer = 0

    def select_victim(self, frames: Sequence[int], step: int) -> int:
        size = len(frames)
        while True:
            page = frames[self.pointer]
            self.pointer = (self.pointer + 1) % size
            if self.reference_flags.get(page):
                self.reference_flags[page] = False
            else:
                return page

    def record_access(self, page: int, is_hit: bool):
        self.reference_flags[page] = True

    def snapshot(self) -> ClockState:
        return ClockState(MappingProxyType(dict(self.reference_flags)), self.pointer)


# =============================================================================
# HELPERS
# =============================================================================

def build_future_references(references: Sequence[int]) -> Mapping[int, Tuple[int, ...]]:
    """
    Map every page to the ascending positions where it is referenced.

    One pass over the reference string; the result is read-only.

    Args:
        references (Sequence[int]): The full reference string

    Returns:
        Mapping[int, Tuple[int, ...]]: page -> positions, in order
    """
    positions: Dict[int, List[int]] = {}
    for index, page in enumerate(references):
        positions.setdefault(page, []).append(index)
    return MappingProxyType({page: tuple(idx) for page, idx in positions.items()})


POLICIES = {
    FIFOPolicy.name: FIFOPolicy,
    LRUPolicy.name: LRUPolicy,
    OptimalPolicy.name: OptimalPolicy,
    ClockPolicy.name: ClockPolicy,
}


def create_policy(algorithm: str, references: Sequence[int]):
    """
    Build the policy object for `algorithm`.

    Raises:
        KeyError: If `algorithm` is not a known policy name
    """
    if algorithm == OptimalPolicy.name:
        return OptimalPolicy(references)
    return POLICIES[algorithm]()
