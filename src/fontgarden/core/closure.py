"""Composite closure over component references.

A composite glyph draws other glyphs through components. Any glyph subset
that is imported or exported on its own has to include everything its
composites depend on, transitively.
"""

from collections.abc import Callable, Iterable, Iterator

import structlog

from fontgarden.config import CyclePolicy
from fontgarden.exceptions import ComponentCycleError

logger = structlog.get_logger(__name__)

ComponentLookup = Callable[[str], Iterable[str]]
"""Returns the component base names of a glyph, empty for unknown names."""

_VISITING = 1
_DONE = 2


def close(
    seed_names: Iterable[str],
    components_of: ComponentLookup,
    cycle_policy: CyclePolicy = CyclePolicy.IGNORE,
) -> set[str]:
    """Expand glyph names to include everything they reference.

    Depth-first with an explicit stack. A name already in the result is not
    expanded again, which also makes cyclic references terminate.

    Args:
        seed_names: Names to start from, always part of the result
        components_of: Component lookup
        cycle_policy: Whether cyclic references are ignored, logged or fatal

    Returns:
        The seed names plus all transitively referenced names

    Raises:
        ComponentCycleError: If ``cycle_policy`` is ERROR and a cycle exists
    """
    result = set(seed_names)
    stack: list[str] = []
    for name in result:
        stack.extend(components_of(name))

    while stack:
        name = stack.pop()
        if name in result:
            continue
        result.add(name)
        stack.extend(components_of(name))

    if cycle_policy is not CyclePolicy.IGNORE:
        cycles = find_component_cycles(result, components_of)
        if cycles and cycle_policy is CyclePolicy.ERROR:
            raise ComponentCycleError(cycles[0])
        for cycle in cycles:
            logger.warning("Component cycle", cycle=cycle)

    return result


def find_component_cycles(
    names: Iterable[str], components_of: ComponentLookup
) -> list[list[str]]:
    """Find component cycles reachable from ``names``.

    Returns:
        Each cycle as a list of names starting and ending with the same name
    """
    state: dict[str, int] = {}
    cycles: list[list[str]] = []

    for root in sorted(names):
        if root in state:
            continue
        state[root] = _VISITING
        path = [root]
        stack: list[Iterator[str]] = [iter(components_of(root))]
        while stack:
            child = next(stack[-1], None)
            if child is None:
                stack.pop()
                state[path.pop()] = _DONE
                continue
            child_state = state.get(child)
            if child_state is None:
                state[child] = _VISITING
                path.append(child)
                stack.append(iter(components_of(child)))
            elif child_state == _VISITING:
                cycles.append(path[path.index(child):] + [child])

    return cycles
