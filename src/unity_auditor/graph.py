"""
Type dependency graph.

Nodes are the extracted classes, keyed by fully qualified name. Edges point
from a class to every type it names in its inheritance list and in its method
signatures. Targets that match an extracted class resolve to that class's
node; anything else stays as an external name.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional

from unity_auditor.config import PRIMITIVE_TYPES
from unity_auditor.scripts.models import ClassDefinition
from unity_auditor.scripts.source import type_identifiers

logger = logging.getLogger(__name__)


class DependencyType(str, Enum):
    INHERITANCE = "Inheritance"
    USAGE = "Usage"


@dataclass
class DependencyNode:
    """A class in the dependency graph."""

    id: str
    name: str
    namespace: str
    file_path: str
    dependencies: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class DependencyEdge:
    source: str
    target: str
    type: DependencyType


@dataclass
class DependencyGraph:
    """Directed graph of type dependencies with forward and reverse indexes."""

    nodes: Dict[str, DependencyNode] = field(default_factory=dict)
    edges: List[DependencyEdge] = field(default_factory=list)
    _forward: Dict[str, List[str]] = field(default_factory=dict, repr=False)
    _reverse: Dict[str, List[str]] = field(default_factory=dict, repr=False)
    _by_name: Dict[str, List[str]] = field(default_factory=dict, repr=False)

    @property
    def total_nodes(self) -> int:
        return len(self.nodes)

    @property
    def total_edges(self) -> int:
        return len(self.edges)

    def add_node(self, node: DependencyNode) -> bool:
        """Add a node. Returns False if a node with the same id exists."""
        if node.id in self.nodes:
            return False
        self.nodes[node.id] = node
        self._forward.setdefault(node.id, [])
        self._by_name.setdefault(node.name, []).append(node.id)
        return True

    def add_edge(self, edge: DependencyEdge) -> bool:
        """Add an edge unless the same source/target pair is already present."""
        targets = self._forward.setdefault(edge.source, [])
        if edge.target in targets:
            return False
        targets.append(edge.target)
        self._reverse.setdefault(edge.target, []).append(edge.source)
        self.edges.append(edge)
        if edge.source in self.nodes:
            self.nodes[edge.source].dependencies.append(edge.target)
        return True

    def resolve(self, name: str, namespace: str = "") -> str:
        """Map a simple type name to a node id, or return it unchanged.

        When several classes share the name, the one in ``namespace`` wins,
        otherwise the smallest id.
        """
        candidates = self._by_name.get(name)
        if not candidates:
            return name
        for node_id in sorted(candidates):
            if self.nodes[node_id].namespace == namespace:
                return node_id
        return min(candidates)

    def find_node(self, name: str) -> Optional[DependencyNode]:
        """Look up a node by id or by simple name."""
        if name in self.nodes:
            return self.nodes[name]
        node_id = self.resolve(name)
        return self.nodes.get(node_id)

    def get_dependencies(self, node_id: str) -> List[str]:
        """Targets the given node depends on, in insertion order."""
        return list(self._forward.get(node_id, []))

    def get_dependents(self, node_id: str) -> List[str]:
        """Nodes that depend on the given target."""
        return list(self._reverse.get(node_id, []))

    def internal_edges(self) -> List[DependencyEdge]:
        """Edges whose target is an extracted class."""
        return [e for e in self.edges if e.target in self.nodes]

    def adjacency(self) -> Dict[str, List[str]]:
        """Internal adjacency lists keyed by node id."""
        return {
            node_id: [t for t in self._forward.get(node_id, []) if t in self.nodes]
            for node_id in self.nodes
        }

    def get_circular_dependencies(self) -> List[str]:
        """Return each distinct cycle as ``"A -> B -> C -> A"``."""
        return [format_cycle(cycle) for cycle in find_cycles(self.adjacency())]


def format_cycle(cycle: List[str]) -> str:
    return " -> ".join(cycle + cycle[:1])


def find_cycles(adjacency: Mapping[str, Iterable[str]]) -> List[List[str]]:
    """Find dependency cycles with an iterative depth-first search.

    Only keys of ``adjacency`` are visited; targets outside it are ignored.
    Start nodes and neighbours are visited in ascending order, so the output
    is deterministic. Every cycle is rotated to start at its smallest member
    and reported once.

    A finished node is never entered again, so the result is not the full set
    of elementary cycles: with a -> {b, c}, b -> a and c -> b only a -> b -> a
    is found, because b is already finished when the search reaches it from c.

    Args:
        adjacency: Node id -> ids it points to

    Returns:
        List of cycles, each a list of node ids without the closing repeat
    """
    on_path, done = 1, 2
    state: Dict[str, int] = {}
    seen = set()
    cycles: List[List[str]] = []

    for start in sorted(adjacency):
        if start in state:
            continue
        path = [start]
        state[start] = on_path
        stack = [iter(sorted(adjacency.get(start, ())))]

        while stack:
            advanced = False
            for target in stack[-1]:
                if target not in adjacency:
                    continue
                target_state = state.get(target)
                if target_state is None:
                    state[target] = on_path
                    path.append(target)
                    stack.append(iter(sorted(adjacency.get(target, ()))))
                    advanced = True
                    break
                if target_state == on_path:
                    cycle = path[path.index(target):]
                    pivot = cycle.index(min(cycle))
                    rotated = tuple(cycle[pivot:] + cycle[:pivot])
                    if rotated not in seen:
                        seen.add(rotated)
                        cycles.append(list(rotated))
            if not advanced:
                stack.pop()
                state[path.pop()] = done

    return cycles


def direct_dependencies(
    cls: ClassDefinition, primitive_types: Iterable[str] = PRIMITIVE_TYPES
) -> List[str]:
    """Type names a class depends on directly, deduplicated in order.

    Base types and interfaces come first, followed by every non-primitive
    identifier in method return and parameter types.
    """
    primitives = {p.lower() for p in primitive_types}
    names: List[str] = []

    def add(name: str) -> None:
        if name and name.lower() not in primitives and name not in names:
            names.append(name)

    for name in cls.base_classes + cls.interfaces:
        add(name)
    for method in cls.methods:
        for name in type_identifiers(method.return_type):
            add(name)
        for parameter in method.parameters:
            for name in type_identifiers(parameter.type):
                add(name)
    return names


def build_dependency_graph(
    classes: List[ClassDefinition], primitive_types: Iterable[str] = PRIMITIVE_TYPES
) -> DependencyGraph:
    """Build the dependency graph for a set of classes.

    Args:
        classes: Extracted class definitions
        primitive_types: Type names never treated as dependencies

    Returns:
        DependencyGraph with one node per distinct fully qualified name
    """
    graph = DependencyGraph()
    ordered = sorted(classes, key=lambda c: (c.full_name, c.file_path))

    for cls in ordered:
        added = graph.add_node(
            DependencyNode(
                id=cls.full_name,
                name=cls.name,
                namespace=cls.namespace,
                file_path=cls.file_path,
            )
        )
        if not added:
            logger.debug(f"Duplicate type {cls.full_name} in {cls.file_path}, merging edges")

    for cls in ordered:
        inheritance = set(cls.base_classes) | set(cls.interfaces)
        for name in direct_dependencies(cls, primitive_types):
            target = graph.resolve(name, cls.namespace)
            if target == cls.full_name:
                continue
            kind = DependencyType.INHERITANCE if name in inheritance else DependencyType.USAGE
            graph.add_edge(DependencyEdge(source=cls.full_name, target=target, type=kind))

    logger.debug(f"Dependency graph: {graph.total_nodes} nodes, {graph.total_edges} edges")
    return graph
