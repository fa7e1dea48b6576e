"""Cycle detection via Tarjan's strongly connected components."""

from typing import TYPE_CHECKING, Callable, Dict, Hashable, Iterable, Iterator, List, Set, Tuple, TypeVar

if TYPE_CHECKING:
    from .model import DependencyGraph, DependencyNode


T = TypeVar("T", bound=Hashable)


def strongly_connected_components(
    nodes: Iterable[T],
    successors: Callable[[T], Iterable[T]],
) -> Iterator[List[T]]:
    """
    Yield the strongly connected components of a directed graph.

    Tarjan's algorithm, driven by an explicit work stack instead of
    recursion so that long dependency chains cannot exhaust the interpreter
    stack. Components are yielded in reverse topological order.

    Args:
        nodes: All vertices of the graph.
        successors: Function returning the outbound neighbours of a vertex.

    Yields:
        Lists of vertices, one list per component.
    """
    index: Dict[T, int] = {}
    lowlink: Dict[T, int] = {}
    on_stack: Set[T] = set()
    stack: List[T] = []
    counter = 0

    for start in nodes:
        if start in index:
            continue

        index[start] = lowlink[start] = counter
        counter += 1
        stack.append(start)
        on_stack.add(start)
        work: List[Tuple[T, Iterator[T]]] = [(start, iter(successors(start)))]

        while work:
            vertex, neighbours = work[-1]

            descended = False
            for neighbour in neighbours:
                if neighbour not in index:
                    index[neighbour] = lowlink[neighbour] = counter
                    counter += 1
                    stack.append(neighbour)
                    on_stack.add(neighbour)
                    work.append((neighbour, iter(successors(neighbour))))
                    descended = True
                    break
                if neighbour in on_stack:
                    lowlink[vertex] = min(lowlink[vertex], index[neighbour])

            if descended:
                continue

            # All neighbours visited: propagate lowlink to the caller frame.
            work.pop()
            if work:
                parent = work[-1][0]
                lowlink[parent] = min(lowlink[parent], lowlink[vertex])

            if lowlink[vertex] == index[vertex]:
                component: List[T] = []
                while True:
                    member = stack.pop()
                    on_stack.discard(member)
                    component.append(member)
                    if member == vertex:
                        break
                yield component


def find_cycles(graph: "DependencyGraph") -> List[List["DependencyNode"]]:
    """
    Extract dependency cycles from a graph.

    Components with two or more members are always cycles. A single-member
    component counts only when its node references itself.

    Returns:
        Cycles sorted by size, then by the case-insensitive path of their
        first member; members sorted by case-insensitive path.
    """
    cycles: List[List["DependencyNode"]] = []

    for component in strongly_connected_components(graph.nodes, graph.iter_successors):
        if len(component) == 1 and not graph.has_self_loop(component[0]):
            continue
        cycles.append(sorted(component, key=lambda n: n.sort_key))

    cycles.sort(key=lambda c: (len(c), c[0].sort_key))
    return cycles
