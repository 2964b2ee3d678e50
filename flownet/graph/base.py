from abc import abstractmethod
from dataclasses import dataclass
from typing import Dict, Any, Optional, List, Tuple


class InvalidArgument(ValueError):
    """Raised when a vertex index, vertex count or capacity is out of range."""


@dataclass
class EdgeFlow:
    """Flow routed through one user-specified edge."""
    source: int
    target: int
    flow: int
    capacity: int

    @property
    def status(self) -> str:
        if self.flow == self.capacity:
            return 'saturated'
        if self.flow > 0:
            return 'partial'
        return 'unsaturated'


class BaseGraph:
    """Abstract base class defining the interface for all graph implementations."""

    @abstractmethod
    def num_vertices(self) -> int:
        """Return the total number of vertices in the graph."""
        pass

    @abstractmethod
    def num_edges(self) -> int:
        """Return the number of user-specified edges (residual arcs excluded)."""
        pass

    @abstractmethod
    def has_vertex(self, vertex_id: int) -> bool:
        """Check if a vertex index lies in [0, n)."""
        pass

    @abstractmethod
    def add_edge(self, u: int, v: int, capacity: int) -> Any:
        """Append a directed edge; parallel edges are kept separate."""
        pass

    @abstractmethod
    def get_edges(self) -> List[Tuple[int, int, Dict[str, Any]]]:
        """Return list of all edges with their data, in insertion order."""
        pass

    @abstractmethod
    def get_edge_capacity(self, u: int, v: int) -> Optional[int]:
        """Get total capacity of the edges from u to v, None if there is none."""
        pass

    @abstractmethod
    def compute_flow(self, source: int, sink: int) -> Tuple[int, List[EdgeFlow]]:
        """Compute maximum flow and return it with the per-edge flows."""
        pass

    def _check_vertex(self, vertex_id: int, role: str = 'vertex') -> None:
        if not self.has_vertex(vertex_id):
            raise InvalidArgument(
                f"{role.capitalize()} {vertex_id} is out of range [0, {self.num_vertices()})"
            )


class GraphCreator:
    @staticmethod
    def create_graph(graph_type: str, vertex_count: int, edges: List[Tuple[int, int]],
                     capacities: List[int]) -> BaseGraph:
        """Factory method to create appropriate graph implementation."""
        if graph_type == 'dinic':
            from .dinic_graph import FlowNetwork
            graph = FlowNetwork(vertex_count)
        elif graph_type == 'networkx':
            from .networkx_graph import NetworkXGraph
            graph = NetworkXGraph(vertex_count)
        else:
            raise ValueError(f"Unsupported graph type: {graph_type}")

        for (u, v), capacity in zip(edges, capacities):
            graph.add_edge(u, v, capacity)
        return graph
