# engine.py

"""
Page replacement simulation engine.

Given a page reference string, a frame count and an algorithm
(FIFO, LRU, Optimal or Clock), the simulator replays every reference,
classifies it as a hit or a fault, evicts when the frames are full and
records an immutable snapshot of each step. The finished history and the
statistics derived from it are what the visual front end plays back.

The engine has no UI dependency and can be driven directly:

    sim = PageReplacementSimulator("1,2,3,4,1,2,5", 3, "fifo")
    sim.simulate()
    print(sim.get_execution_trace())
"""

import re
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from policies import POLICIES, PolicyState, create_policy


# =============================================================================
# DEFAULTS
# =============================================================================

ALGORITHMS = ("fifo", "lru", "optimal", "clock")
DEFAULT_REFERENCE_STRING = "7,0,1,2,0,3,0,4,2,3,0,3,2,1,2,0,1,7,0,1"
DEFAULT_FRAME_COUNT = 3
MAX_FRAME_COUNT = 10

_SEPARATORS = re.compile(r"[,\s]+")
_INTEGER = re.compile(r"[+-]?[0-9]+", re.ASCII)


# =============================================================================
# ERRORS
# =============================================================================

class SimulationError(ValueError):
    """Base class for errors raised while configuring a simulation."""


class ParseError(SimulationError):
    """A token in the reference string is not an integer page number."""


class InvalidConfigurationError(SimulationError):
    """Frame count out of range or unknown algorithm."""


# =============================================================================
# RESULT TYPES
# =============================================================================

@dataclass(frozen=True)
class StepRecord:
    """
    Snapshot of the simulation right after one reference was processed.

    Attributes:
        step (int): 0-based position in the reference string
        page (int): The referenced page
        is_hit (bool): True if the page was already resident
        frames (Tuple[int, ...]): Frame contents by slot after this step
        policy_state (PolicyState): Frozen copy of the policy bookkeeping
        evicted (Optional[int]): Page replaced on this step, if any
        frame_index (int): Slot now holding `page`
    """
    step: int
    page: int
    is_hit: bool
    frames: Tuple[int, ...]
    policy_state: PolicyState
    evicted: Optional[int] = None
    frame_index: int = 0


@dataclass(frozen=True)
class Statistics:
    """Aggregate counts for a simulation run. Ratios are percentages."""
    fault_count: int
    hit_count: int
    total_references: int
    hit_ratio_percent: float
    fault_ratio_percent: float

    def as_dict(self) -> Dict[str, Union[int, float]]:
        return asdict(self)


# =============================================================================
# REFERENCE PARSER
# =============================================================================

def parse_reference_string(value) -> Tuple[int, ...]:
    """
    Normalize a reference string into a tuple of page numbers.

    Accepts text separated by commas and/or whitespace ("1, 2 3,4") or an
    iterable of ints / integer strings. Empty input gives an empty tuple.

    Args:
        value: Text, an iterable of page values, or None

    Returns:
        Tuple[int, ...]: The page numbers in reference order

    Raises:
        ParseError: If any token is not an integer
    """
    if value is None:
        return ()
    if isinstance(value, str):
        tokens: List = [t for t in _SEPARATORS.split(value.strip()) if t]
    elif isinstance(value, (bytes, bytearray, Mapping)):
        raise ParseError(f"Reference string must be text or a sequence, got {value!r}")
    else:
        try:
            tokens = list(value)
        except TypeError:
            raise ParseError(f"Reference string must be text or a sequence, got {value!r}") from None

    return tuple(_to_page(token, position) for position, token in enumerate(tokens))


def _to_page(token, position: int) -> int:
    if isinstance(token, bool):
        pass
    elif isinstance(token, int):
        return token
    elif isinstance(token, float) and token.is_integer():
        return int(token)
    elif isinstance(token, str) and _INTEGER.fullmatch(token.strip()):
        return int(token.strip())
    raise ParseError(f"Invalid page reference {token!r} at position {position}")


# =============================================================================
# SIMULATOR
# =============================================================================

class PageReplacementSimulator:
    """
    Runs one page replacement algorithm over one reference string.

    Attributes:
        reference_string (Tuple[int, ...]): Parsed page references
        frame_count (int): Number of physical frames
        algorithm (str): One of ALGORITHMS
        frames (List[int]): Resident pages by slot
        policy: Algorithm bookkeeping (see policies.py)
        page_faults (int): Faults counted so far
        page_hits (int): Hits counted so far
        event_log (List[str]): Human-readable log of every operation
    """

    def __init__(self, reference_string, frame_count: int, algorithm: str):
        """
        Validate the configuration and prepare an unrun simulation.

        Args:
            reference_string: Text or sequence of page numbers
            frame_count (int): Number of frames, at least 1
            algorithm (str): 'fifo', 'lru', 'optimal' or 'clock'

        Raises:
            ParseError: If the reference string is malformed
            InvalidConfigurationError: If frame_count or algorithm is invalid
        """
        self.reference_string = parse_reference_string(reference_string)
        self.frame_count = _validate_frame_count(frame_count)
        self.algorithm = _validate_algorithm(algorithm)

        self.frames: List[int] = []
        self.page_faults = 0
        self.page_hits = 0
        self.event_log: List[str] = []
        self._history: List[StepRecord] = []
        self._complete = False

        # Optimal builds its future-reference index here, before step 0
        self.policy = create_policy(self.algorithm, self.reference_string)

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    @property
    def history(self) -> Tuple[StepRecord, ...]:
        return tuple(self._history)

    @property
    def is_complete(self) -> bool:
        return self._complete

    def simulate(self) -> List[StepRecord]:
        """
        Process the whole reference string and return the step history.

        Calling it again on a finished simulator returns the same history
        without reprocessing.

        Returns:
            List[StepRecord]: One record per reference, in order
        """
        if not self._complete:
            for step, page in enumerate(self.reference_string):
                self._process_page(page, step)
            self._complete = True
        return list(self._history)

    def get_statistics(self) -> Statistics:
        """
        Calculate fault/hit counts and ratios.

        Returns:
            Statistics: Ratios are percentages rounded to 2 places, 0 when
            nothing has been referenced
        """
        total = self.page_faults + self.page_hits
        if total == 0:
            hit_ratio = fault_ratio = 0.0
        else:
            hit_ratio = round(self.page_hits / total * 100, 2)
            fault_ratio = round(self.page_faults / total * 100, 2)
        return Statistics(
            fault_count=self.page_faults,
            hit_count=self.page_hits,
            total_references=total,
            hit_ratio_percent=hit_ratio,
            fault_ratio_percent=fault_ratio,
        )

    def get_execution_trace(self) -> str:
        """Render configuration, statistics and every step as plain text."""
        stats = self.get_statistics()
        lines = [
            f"Page Replacement Algorithm: {self.algorithm.upper()}",
            f"Number of Frames: {self.frame_count}",
            f"Reference String: {', '.join(map(str, self.reference_string))}",
            "",
            "Statistics:",
            f"- Page Faults: {stats.fault_count}",
            f"- Page Hits: {stats.hit_count}",
            f"- Hit Ratio: {stats.hit_ratio_percent:.2f}%",
            "",
            "Execution Trace:",
        ]
        for record in self._history:
            outcome = "HIT" if record.is_hit else "FAULT"
            frames = ", ".join(map(str, record.frames))
            lines.append(f"Step {record.step}: Page {record.page} - {outcome} - Frames: [{frames}]")
        return "\n".join(lines) + "\n"

    # =========================================================================
    # STEP PROCESSOR
    # =========================================================================

    def _process_page(self, page: int, step: int):
        """
        Handle one reference: hit test, eviction if needed, bookkeeping,
        then append the step snapshot.
        """
        is_hit = page in self.frames
        evicted = None

        # ----- PAGE HIT -----
        if is_hit:
            self.page_hits += 1
            frame_index = self.frames.index(page)
            self.event_log.append(f"Hit: Page {page} in Frame {frame_index}")
            self.policy.record_access(page, is_hit=True)

        # ----- PAGE FAULT -----
        else:
            self.page_faults += 1
            self.event_log.append(f"Fault: Page {page} not in memory")

            if len(self.frames) < self.frame_count:
                # Free frame available - load directly
                frame_index = len(self.frames)
                self.frames.append(page)
                self.event_log.append(f"Loaded: Page {page} -> Frame {frame_index}")
            else:
                evicted = self.policy.select_victim(self.frames, step)
                frame_index = self.frames.index(evicted)
                self.event_log.append(f"Evicting: Page {evicted} from Frame {frame_index}")
                self.frames[frame_index] = page
                self.event_log.append(f"Loaded: Page {page} -> Frame {frame_index} (replaced)")

            self.policy.record_access(page, is_hit=False)

        self._history.append(StepRecord(
            step=step,
            page=page,
            is_hit=is_hit,
            frames=tuple(self.frames),
            policy_state=self.policy.snapshot(),
            evicted=evicted,
            frame_index=frame_index,
        ))


# =============================================================================
# VALIDATION
# =============================================================================

def _validate_frame_count(frame_count) -> int:
    if isinstance(frame_count, bool) or not isinstance(frame_count, int):
        raise InvalidConfigurationError(f"Frame count must be an integer, got {frame_count!r}")
    if frame_count < 1:
        raise InvalidConfigurationError(f"Frame count must be at least 1, got {frame_count}")
    return frame_count


def _validate_algorithm(algorithm) -> str:
    name = algorithm.strip().lower() if isinstance(algorithm, str) else None
    if name not in POLICIES:
        raise InvalidConfigurationError(
            f"Unknown algorithm {algorithm!r}; expected one of {', '.join(ALGORITHMS)}"
        )
    return name


# =============================================================================
# COMPARISONS
# =============================================================================

def run_simulation(reference_string, frame_count: int, algorithm: str) -> PageReplacementSimulator:
    """Construct a simulator, run it to completion and return it."""
    simulator = PageReplacementSimulator(reference_string, frame_count, algorithm)
    simulator.simulate()
    return simulator


def compare_algorithms(reference_string, frame_count: int,
                       algorithms: Iterable[str] = ALGORITHMS) -> Dict[str, Statistics]:
    """
    Run several algorithms on the same input.

    Returns:
        Dict[str, Statistics]: algorithm name -> statistics, in the order given
    """
    references = parse_reference_string(reference_string)
    return {
        name: run_simulation(references, frame_count, name).get_statistics()
        for name in algorithms
    }


def fault_curve(reference_string, algorithm: str, max_frames: int = MAX_FRAME_COUNT) -> List[Tuple[int, int]]:
    """
    Fault count for every frame count from 1 to `max_frames`.

    A curve that goes up anywhere is Belady's anomaly.

    Returns:
        List[Tuple[int, int]]: (frame_count, fault_count) pairs
    """
    references = parse_reference_string(reference_string)
    max_frames = _validate_frame_count(max_frames)
    return [
        (frames, run_simulation(references, frames, algorithm).page_faults)
        for frames in range(1, max_frames + 1)
    ]
