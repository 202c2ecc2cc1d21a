"""Cycle detection over copy/include alias graphs.

Nodes are ``locale/CATEGORY`` strings (see alias_node); an edge points from a
category to the category it aliases. Alias chains in real locale sets can be
long, so the search keeps an explicit stack instead of recursing.

Python 3.13+.
"""

from collections.abc import Iterator, Mapping
from enum import Enum, auto

__all__ = ["alias_node", "detect_cycles"]


class _Mark(Enum):
    ON_PATH = auto()
    FINISHED = auto()


def alias_node(locale: str, category: str) -> str:
    """Graph node ID for one locale's category.

    Example:
        >>> alias_node("fr_BE", "LC_TIME")
        'fr_BE/LC_TIME'
    """
    return f"{locale}/{category}"


def _successors(dependencies: Mapping[str, set[str]], node: str) -> Iterator[str]:
    return iter(sorted(dependencies.get(node, ())))


def detect_cycles(dependencies: Mapping[str, set[str]]) -> list[list[str]]:
    """Find the cycles of an alias graph.

    Roots and successors are walked in sorted order, so the result does not
    depend on mapping order. A cycle is reported once, starting at the node
    where the walk first entered it and ending with that node again. Nodes
    that only appear as targets are leaves.

    Args:
        dependencies: Node ID -> IDs of the nodes it aliases

    Returns:
        Cycles as node paths, e.g. ``[["a", "b", "a"]]``; empty when acyclic

    Example:
        >>> detect_cycles({"c": {"a"}, "a": {"b"}, "b": {"c"}})
        [['a', 'b', 'c', 'a']]
    """
    marks: dict[str, _Mark] = {}
    cycles: list[list[str]] = []
    reported: set[frozenset[str]] = set()

    for root in sorted(dependencies):
        if root in marks:
            continue

        marks[root] = _Mark.ON_PATH
        path = [root]
        pending = [_successors(dependencies, root)]

        while pending:
            target = next(pending[-1], None)
            if target is None:
                pending.pop()
                marks[path.pop()] = _Mark.FINISHED
                continue

            mark = marks.get(target)
            if mark is None:
                marks[target] = _Mark.ON_PATH
                path.append(target)
                pending.append(_successors(dependencies, target))
            elif mark is _Mark.ON_PATH:
                cycle = [*path[path.index(target) :], target]
                members = frozenset(cycle)
                if members not in reported:
                    reported.add(members)
                    cycles.append(cycle)

    return cycles
