"""Tests for analysis.graph: alias node IDs and iterative cycle detection."""

from __future__ import annotations

from hypothesis import event, given
from hypothesis import strategies as st

from localeforge.analysis import alias_node, detect_cycles

# ============================================================================
# NODE IDS
# ============================================================================


class TestAliasNode:
    """alias_node joins locale and category."""

    def test_node_format(self) -> None:
        """locale/CATEGORY."""
        assert alias_node("fr_BE", "LC_TIME") == "fr_BE/LC_TIME"

    def test_modifier_kept(self) -> None:
        """'@' is not special in node IDs."""
        assert alias_node("sr_RS@latin", "LC_TIME") == "sr_RS@latin/LC_TIME"


# ============================================================================
# CYCLE DETECTION
# ============================================================================


class TestDetectCycles:
    """detect_cycles reports each cycle once, deterministically."""

    def test_acyclic_chain(self) -> None:
        """A chain has no cycles."""
        deps = {"a": {"b"}, "b": {"c"}, "c": set()}

        assert detect_cycles(deps) == []

    def test_empty_graph(self) -> None:
        """No nodes, no cycles."""
        assert detect_cycles({}) == []

    def test_self_loop(self) -> None:
        """A node aliasing itself is a cycle of length one."""
        assert detect_cycles({"a": {"a"}}) == [["a", "a"]]

    def test_three_cycle(self) -> None:
        """The cycle starts at the smallest node."""
        deps = {"c": {"a"}, "a": {"b"}, "b": {"c"}}

        assert detect_cycles(deps) == [["a", "b", "c", "a"]]

    def test_cycle_reached_through_tail(self) -> None:
        """Only the looping part is reported."""
        deps = {"a": {"b"}, "b": {"c"}, "c": {"b"}}

        assert detect_cycles(deps) == [["b", "c", "b"]]

    def test_two_disjoint_cycles(self) -> None:
        """Independent cycles are both found."""
        deps = {"a": {"b"}, "b": {"a"}, "x": {"y"}, "y": {"x"}}

        assert detect_cycles(deps) == [["a", "b", "a"], ["x", "y", "x"]]

    def test_diamond_is_acyclic(self) -> None:
        """Shared targets are not cycles."""
        deps = {"a": {"b", "c"}, "b": {"d"}, "c": {"d"}, "d": set()}

        assert detect_cycles(deps) == []

    def test_neighbors_missing_from_mapping(self) -> None:
        """Referenced nodes without an entry are leaves."""
        assert detect_cycles({"a": {"b"}}) == []

    def test_long_chain_has_no_recursion_limit(self) -> None:
        """Iterative DFS handles chains longer than the recursion limit."""
        size = 5000
        deps = {f"n{i:05d}": {f"n{i + 1:05d}"} for i in range(size)}
        deps[f"n{size:05d}"] = {"n00000"}

        cycles = detect_cycles(deps)

        assert len(cycles) == 1
        assert len(cycles[0]) == size + 2

    @given(
        st.dictionaries(
            st.sampled_from("abcdef"),
            st.sets(st.sampled_from("abcdef"), max_size=3),
            max_size=6,
        )
    )
    def test_reported_cycles_are_real(self, deps: dict[str, set[str]]) -> None:
        """Every consecutive pair of a reported cycle is an edge."""
        cycles = detect_cycles(deps)
        event(f"cycles={len(cycles)}")

        for cycle in cycles:
            assert cycle[0] == cycle[-1]
            for source, target in zip(cycle, cycle[1:], strict=False):
                assert target in deps.get(source, set())

    @given(
        st.dictionaries(
            st.sampled_from("abcdef"),
            st.sets(st.sampled_from("abcdef"), max_size=3),
            max_size=6,
        )
    )
    def test_deterministic(self, deps: dict[str, set[str]]) -> None:
        """Insertion order of the mapping does not change the result."""
        reordered = dict(reversed(list(deps.items())))

        assert detect_cycles(deps) == detect_cycles(reordered)
