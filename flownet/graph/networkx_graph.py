import networkx as nx
import time
from typing import List, Tuple, Dict, Any, Optional, Callable
from numbers import Integral

from .base import BaseGraph, EdgeFlow, InvalidArgument
import logging

# Configure logging for the module
logger = logging.getLogger(__name__)

class NetworkXGraph(BaseGraph):
    """Reference implementation backed by networkx's flow algorithms.

    ``nx.DiGraph`` holds at most one edge per ordered pair, so parallel edges
    are merged for the solver and their flow is split back afterwards.
    """

    def __init__(self, vertex_count: int, flow_func: Optional[Callable] = None):
        self.logger = logging.getLogger(__name__)
        if not isinstance(vertex_count, Integral) or vertex_count < 0:
            raise InvalidArgument(f"Vertex count must be a non-negative integer, got {vertex_count!r}")
        self.n = vertex_count
        self.flow_func = flow_func or nx.algorithms.flow.dinitz
        self._edges: List[Tuple[int, int, int]] = []
        self._flows: List[int] = []

    def add_edge(self, u: int, v: int, capacity: int) -> int:
        self._check_vertex(u, 'source vertex')
        self._check_vertex(v, 'target vertex')
        if capacity < 0:
            raise InvalidArgument(f"Capacity of edge {u}->{v} must be non-negative, got {capacity}")
        self._edges.append((u, v, capacity))
        self._flows.append(0)
        return len(self._edges) - 1

    def _create_graph(self) -> nx.DiGraph:
        """Create NetworkX graph with merged capacities for parallel edges."""
        g = nx.DiGraph()
        g.add_nodes_from(range(self.n))
        for u, v, capacity in self._edges:
            if u == v or capacity <= 0:
                continue
            if g.has_edge(u, v):
                g[u][v]['capacity'] += capacity
            else:
                g.add_edge(u, v, capacity=capacity)
        return g

    def compute_flow(self, source: int, sink: int) -> Tuple[int, List[EdgeFlow]]:
        """Compute maximum flow between source and sink nodes."""
        self._check_vertex(source, 'source')
        self._check_vertex(sink, 'sink')
        self._flows = [0] * len(self._edges)

        if source == sink:
            return 0, self.edge_flows()

        g = self._create_graph()
        start = time.time()
        flow_value, flow_dict = nx.maximum_flow(g, source, sink, flow_func=self.flow_func)
        self.logger.debug(f"Solver Time: {time.time() - start}")

        # Hand merged flow back to the parallel edges in insertion order
        remaining = {
            (u, v): int(f)
            for u, flows in flow_dict.items()
            for v, f in flows.items() if f > 0
        }
        for idx, (u, v, capacity) in enumerate(self._edges):
            if u == v:
                continue
            assigned = min(capacity, remaining.get((u, v), 0))
            if assigned:
                self._flows[idx] = assigned
                remaining[(u, v)] -= assigned

        return int(flow_value), self.edge_flows()

    def edge_flows(self) -> List[EdgeFlow]:
        return [
            EdgeFlow(u, v, flow, capacity)
            for (u, v, capacity), flow in zip(self._edges, self._flows)
        ]

    # Required BaseGraph interface methods
    def num_vertices(self) -> int:
        return self.n

    def num_edges(self) -> int:
        return len(self._edges)

    def has_vertex(self, vertex_id: int) -> bool:
        return (isinstance(vertex_id, Integral) and not isinstance(vertex_id, bool)
                and 0 <= vertex_id < self.n)

    def get_edges(self) -> List[Tuple[int, int, Dict[str, Any]]]:
        return [
            (u, v, {'capacity': capacity, 'flow': flow})
            for (u, v, capacity), flow in zip(self._edges, self._flows)
        ]

    def get_edge_capacity(self, u: int, v: int) -> Optional[int]:
        capacities = [c for a, b, c in self._edges if a == u and b == v]
        return sum(capacities) if capacities else None
