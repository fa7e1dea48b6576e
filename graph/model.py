"""Graph data model for storing file dependency relationships."""

from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple, Union

from .cycles import find_cycles


class DependencyNode:
    """
    A file in the dependency graph.

    Identity is the file path compared case-insensitively, so two nodes whose
    paths differ only in casing are equal and hash alike. The original casing
    is kept for display.
    """

    __slots__ = ("_file_path", "_key")

    def __init__(self, file_path: str):
        self._file_path = str(file_path)
        self._key = self._file_path.lower()

    @property
    def file_path(self) -> str:
        """Return the path exactly as it was first registered."""
        return self._file_path

    @property
    def sort_key(self) -> str:
        """Return the lower-cased path used for equality and ordering."""
        return self._key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DependencyNode):
            return NotImplemented
        return self._key == other._key

    def __hash__(self) -> int:
        return hash(self._key)

    def __lt__(self, other: "DependencyNode") -> bool:
        return self._key < other._key

    def __repr__(self) -> str:
        return f"DependencyNode({self._file_path!r})"


class DependencyEdge(NamedTuple):
    """A directed edge: ``source`` references ``target``."""

    source: DependencyNode
    target: DependencyNode


class DependencyGraph:
    """
    A directed graph of file dependencies.

    Nodes are registered by case-insensitive path with get-or-create
    semantics. Edges are kept in insertion order and are not deduplicated:
    a file that references the same target twice contributes two edges.
    Per-node adjacency lists are maintained next to the edge list so that
    count and neighbour queries do not scan every edge.
    """

    def __init__(self):
        self._nodes: Dict[str, DependencyNode] = {}
        self._edges: List[DependencyEdge] = []
        self._outbound: Dict[DependencyNode, List[DependencyNode]] = {}
        self._inbound: Dict[DependencyNode, List[DependencyNode]] = {}

    @property
    def nodes(self) -> Tuple[DependencyNode, ...]:
        """Return all nodes in registration order."""
        return tuple(self._nodes.values())

    @property
    def edges(self) -> Tuple[DependencyEdge, ...]:
        """Return all edges in insertion order."""
        return tuple(self._edges)

    def get_node(self, path: str) -> Optional[DependencyNode]:
        """Return the node registered for ``path``, or None."""
        return self._nodes.get(str(path).lower())

    def get_or_add_node(self, path: str) -> DependencyNode:
        """
        Return the node for ``path``, creating and registering it if needed.

        Paths differing only in casing map to the same node instance.
        """
        key = str(path).lower()
        node = self._nodes.get(key)
        if node is None:
            node = DependencyNode(path)
            self._nodes[key] = node
            self._outbound[node] = []
            self._inbound[node] = []
        return node

    def add_dependency(self, from_path: str, to_path: str) -> DependencyEdge:
        """
        Add a directed edge ``from_path -> to_path``.

        Both endpoints are registered if missing. Whether either path exists
        on disk is not checked here; rules do that before calling.
        """
        source = self.get_or_add_node(from_path)
        target = self.get_or_add_node(to_path)

        edge = DependencyEdge(source, target)
        self._edges.append(edge)
        self._outbound[source].append(target)
        self._inbound[target].append(source)
        return edge

    def get_inbound_count(self, node: DependencyNode) -> int:
        """Number of edges that point at ``node``."""
        return len(self._inbound.get(node, ()))

    def get_outbound_count(self, node: DependencyNode) -> int:
        """Number of edges that start at ``node``."""
        return len(self._outbound.get(node, ()))

    def get_inbound_sources(self, node: DependencyNode) -> List[DependencyNode]:
        """Distinct nodes that reference ``node``, in first-seen order."""
        return list(dict.fromkeys(self._inbound.get(node, ())))

    def get_outbound_targets(self, node: DependencyNode) -> List[DependencyNode]:
        """Distinct nodes referenced by ``node``, in first-seen order."""
        return list(dict.fromkeys(self._outbound.get(node, ())))

    def has_self_loop(self, node: DependencyNode) -> bool:
        """Check whether ``node`` references itself."""
        return any(target == node for target in self._outbound.get(node, ()))

    def get_orphan_nodes(self) -> List[DependencyNode]:
        """
        Get nodes with neither inbound nor outbound edges.

        Returns:
            Orphan nodes sorted by case-insensitive path.
        """
        orphans = [
            node for node in self._nodes.values()
            if not self._inbound[node] and not self._outbound[node]
        ]
        return sorted(orphans, key=lambda n: n.sort_key)

    def get_top_inbound(self, top: int) -> List[Tuple[DependencyNode, int]]:
        """
        Rank all nodes by inbound edge count.

        Zero-count nodes take part in the ranking; callers that only want
        referenced files filter the result.

        Args:
            top: Maximum number of entries to return.

        Returns:
            ``(node, count)`` pairs, highest count first, ties broken by
            case-insensitive path.
        """
        return self._rank(self._inbound, top)

    def get_top_outbound(self, top: int) -> List[Tuple[DependencyNode, int]]:
        """Rank all nodes by outbound edge count (see ``get_top_inbound``)."""
        return self._rank(self._outbound, top)

    def _rank(
        self,
        adjacency: Dict[DependencyNode, List[DependencyNode]],
        top: int,
    ) -> List[Tuple[DependencyNode, int]]:
        if top <= 0:
            return []
        ranked = sorted(
            ((node, len(adjacency[node])) for node in self._nodes.values()),
            key=lambda item: (-item[1], item[0].sort_key),
        )
        return ranked[:top]

    def iter_successors(self, node: DependencyNode) -> Iterator[DependencyNode]:
        """Iterate over outbound neighbours of ``node``, one per edge."""
        return iter(self._outbound.get(node, ()))

    def get_cycles(self) -> List[List[DependencyNode]]:
        """
        Get all dependency cycles.

        A cycle is a strongly connected component with at least two members,
        or a single node that references itself. Members are sorted by
        case-insensitive path; cycles are sorted by size, then by their
        first member.
        """
        return find_cycles(self)

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._nodes)

    def __contains__(self, item: Union[str, DependencyNode]) -> bool:
        """Check if a path or node is registered."""
        if isinstance(item, DependencyNode):
            return item.sort_key in self._nodes
        return str(item).lower() in self._nodes

    def __repr__(self) -> str:
        return f"DependencyGraph(nodes={len(self._nodes)}, edges={len(self._edges)})"
