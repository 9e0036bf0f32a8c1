"""NetworkX parent-link graph over a taxonomy catalog."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import networkx as nx

if TYPE_CHECKING:
    from skill_tree.memory.taxonomy_catalog import TaxonomyCatalog

logger = logging.getLogger(__name__)


class TaxonomyCycleError(ValueError):
    """Raised when a taxonomy parent chain loops back on itself.

    Taxonomies are authored externally and fixed at load time, so a cycle is
    a structural configuration error rather than a transient condition.
    """

    def __init__(self, key: str, cycle: list[str]) -> None:
        self.key = key
        self.cycle = cycle
        msg = f"Taxonomy parent chain of '{key}' contains a cycle: {' -> '.join(cycle)}"
        super().__init__(msg)


class TaxonomyGraph:
    """Directed graph with one edge per entry pointing at its parent.

    Parent keys missing from the catalog are dropped at build time and the
    entry becomes a root.
    """

    def __init__(self) -> None:
        self._graph: nx.DiGraph[str] = nx.DiGraph()
        self._cycle_members: dict[str, list[str]] = {}

    @classmethod
    def from_catalog(cls, catalog: TaxonomyCatalog) -> TaxonomyGraph:
        """Build the parent-link graph for every entry in ``catalog``."""
        graph = cls()
        for entry in catalog:
            graph._graph.add_node(
                entry.key, label=entry.display_name, category=entry.category
            )
        for entry in catalog:
            if entry.parent_key is None:
                continue
            if entry.parent_key not in catalog:
                logger.warning(
                    "Taxonomy entry %s references unknown parent %s, treating as root",
                    entry.key,
                    entry.parent_key,
                )
                continue
            graph._graph.add_edge(entry.key, entry.parent_key)
        graph._index_cycles()
        return graph

    def _index_cycles(self) -> None:
        """Record, for every node on a cycle, the cycle it belongs to."""
        self._cycle_members = {}
        for cycle in nx.simple_cycles(self._graph):
            nodes = list(cycle)
            logger.error("Taxonomy parent cycle detected: %s", " -> ".join(nodes))
            for node in nodes:
                self._cycle_members.setdefault(node, nodes)

    def parent(self, key: str) -> str | None:
        """Return the resolved parent key, or None for roots and unknown keys."""
        if key not in self._graph:
            return None
        successors = list(self._graph.successors(key))
        return successors[0] if successors else None

    def ancestor_chain(self, key: str) -> list[str]:
        """Return ancestors of ``key`` nearest first, ending at its root.

        Raises:
            TaxonomyCycleError: If the chain enters a cycle.
        """
        chain: list[str] = []
        current = key
        while True:
            if current in self._cycle_members:
                raise TaxonomyCycleError(key, self._cycle_members[current])
            parent = self.parent(current)
            if parent is None:
                return chain
            chain.append(parent)
            current = parent

    def depth(self, key: str) -> int:
        """Tree level of ``key``; roots are at depth 0."""
        return len(self.ancestor_chain(key))

    @property
    def has_cycles(self) -> bool:
        return bool(self._cycle_members)

    def roots(self) -> list[str]:
        """Keys with no resolved parent, sorted."""
        return sorted(
            str(n) for n in self._graph.nodes if self._graph.out_degree(n) == 0
        )

    def children(self, key: str) -> list[str]:
        if key not in self._graph:
            return []
        return sorted(str(n) for n in self._graph.predecessors(key))

    def node_count(self) -> int:
        return int(self._graph.number_of_nodes())

    def edge_count(self) -> int:
        return int(self._graph.number_of_edges())

    def save(self, path: str) -> None:
        """Serialize graph to JSON file using node-link format."""
        data: dict[str, Any] = nx.node_link_data(self._graph)  # pyright: ignore[reportUnknownMemberType, reportUnknownVariableType]
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    def load(self, path: str) -> None:
        """Deserialize graph from JSON file using node-link format."""
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        self._graph = nx.node_link_graph(data, directed=True)  # pyright: ignore[reportUnknownMemberType]
        self._index_cycles()
