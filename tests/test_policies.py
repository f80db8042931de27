"""Tests for the replacement policies in isolation.

Each policy is driven directly through select_victim / record_access,
without the simulator, to pin down its eviction and tie-break rules.
"""

from math import inf

import pytest

from policies import (
    POLICIES,
    ClockPolicy,
    ClockState,
    FIFOPolicy,
    FIFOState,
    LRUPolicy,
    LRUState,
    OptimalPolicy,
    build_future_references,
    create_policy,
)


# -- FIFO ---------------------------------------------------------------------


class TestFIFOPolicy:
    """FIFO evicts in load order; hits change nothing."""

    def test_selects_oldest_page(self) -> None:
        policy = FIFOPolicy()
        for page in (1, 2, 3):
            policy.record_access(page, is_hit=False)
        assert policy.select_victim([1, 2, 3], 3) == 1
        assert policy.snapshot() == FIFOState((2, 3))

    def test_hit_does_not_reorder(self) -> None:
        policy = FIFOPolicy()
        policy.record_access(1, is_hit=False)
        policy.record_access(2, is_hit=False)
        policy.record_access(1, is_hit=True)
        assert policy.snapshot() == FIFOState((1, 2))


# -- LRU ----------------------------------------------------------------------


class TestLRUPolicy:
    """LRU evicts the page accessed longest ago."""

    def test_access_moves_page_to_tail(self) -> None:
        policy = LRUPolicy()
        for page in (1, 2, 3):
            policy.record_access(page, is_hit=False)
        policy.record_access(1, is_hit=True)
        assert policy.snapshot() == LRUState((2, 3, 1))
        assert policy.select_victim([1, 2, 3], 4) == 2
        assert policy.snapshot() == LRUState((3, 1))


# -- Optimal ------------------------------------------------------------------


class TestOptimalPolicy:
    """Optimal evicts the page whose next use is furthest away."""

    def test_future_reference_index(self) -> None:
        index = build_future_references((1, 2, 1, 3, 1))
        assert dict(index) == {1: (0, 2, 4), 2: (1,), 3: (3,)}

    def test_index_is_read_only(self) -> None:
        index = build_future_references((1, 2))
        with pytest.raises(TypeError):
            index[3] = (5,)

    def test_next_use_is_strictly_after_step(self) -> None:
        policy = OptimalPolicy((1, 2, 1, 3, 1))
        assert policy.next_use(1, 0) == 2
        assert policy.next_use(1, 2) == 4
        assert policy.next_use(1, 4) == inf
        assert policy.next_use(9, 0) == inf

    def test_evicts_furthest_next_use(self) -> None:
        policy = OptimalPolicy((1, 2, 3, 4, 2, 3, 1))
        assert policy.select_victim([1, 2, 3], 3) == 1

    def test_never_used_again_wins(self) -> None:
        policy = OptimalPolicy((1, 2, 3, 4, 2, 3))
        assert policy.select_victim([1, 2, 3], 3) == 1

    def test_tie_goes_to_first_in_frame_order(self) -> None:
        """Several pages that never recur: the first one in the frames."""
        policy = OptimalPolicy((5, 6, 7, 8, 5))
        assert policy.select_victim([5, 6, 7], 3) == 6
        assert policy.select_victim([7, 6, 5], 3) == 7

    def test_access_leaves_state_unchanged(self) -> None:
        policy = OptimalPolicy((1, 2))
        before = policy.snapshot()
        policy.record_access(1, is_hit=True)
        assert policy.snapshot() is before


# -- Clock --------------------------------------------------------------------


class TestClockPolicy:
    """Clock gives referenced pages a second chance."""

    def test_unset_flags_evict_at_pointer(self) -> None:
        """With no reference bits set, the page under the hand goes."""
        policy = ClockPolicy()
        assert policy.select_victim([1, 2, 3], 3) == 1
        assert policy.pointer == 1

    def test_set_flag_is_cleared_and_skipped(self) -> None:
        policy = ClockPolicy()
        policy.reference_flags.update({1: True, 2: False, 3: True})
        assert policy.select_victim([1, 2, 3], 3) == 2
        assert policy.pointer == 2
        assert policy.reference_flags == {1: False, 2: False, 3: True}

    def test_all_flags_set_wraps_around(self) -> None:
        """A full sweep clears every bit, then the starting page goes."""
        policy = ClockPolicy()
        policy.pointer = 1
        for page in (1, 2, 3):
            policy.record_access(page, is_hit=False)
        assert policy.select_victim([1, 2, 3], 3) == 2
        assert policy.pointer == 2
        assert not any(policy.reference_flags.values())

    def test_snapshot_is_a_copy(self) -> None:
        policy = ClockPolicy()
        policy.record_access(1, is_hit=False)
        state = policy.snapshot()
        policy.record_access(2, is_hit=False)
        assert state == ClockState({1: True}, 0)
        assert dict(state.reference_flags) == {1: True}


# -- Factory ------------------------------------------------------------------


class TestCreatePolicy:
    """The factory builds one variant per algorithm name."""

    @pytest.mark.parametrize(
        "name, cls",
        [("fifo", FIFOPolicy), ("lru", LRUPolicy), ("optimal", OptimalPolicy), ("clock", ClockPolicy)],
    )
    def test_builds_variant(self, name, cls) -> None:
        policy = create_policy(name, (1, 2, 3))
        assert isinstance(policy, cls)
        assert policy.name == name

    def test_registry_names(self) -> None:
        assert set(POLICIES) == {"fifo", "lru", "optimal", "clock"}

    def test_unknown_name(self) -> None:
        with pytest.raises(KeyError):
            create_policy("random", ())
