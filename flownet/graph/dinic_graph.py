from collections import deque
from numbers import Integral
from typing import List, Tuple, Dict, Any, Optional, Iterator, Set, Deque
import logging

from .base import BaseGraph, EdgeFlow, InvalidArgument

# Configure logging for the module
logger = logging.getLogger(__name__)

UNREACHED = -1


class DirectedArc:
    """One arc of the residual multigraph.

    Every user edge is stored as a forward arc plus a reverse arc with zero
    original capacity. ``reverse_index`` is the position of the paired arc in
    the target vertex's adjacency list.
    """
    __slots__ = ("target", "reverse_index", "residual_capacity",
                 "original_capacity", "flow", "forward")

    def __init__(self, target: int, reverse_index: int, capacity: int, forward: bool = True) -> None:
        self.target = target
        self.reverse_index = reverse_index
        self.residual_capacity = capacity
        self.original_capacity = capacity
        self.flow = 0
        self.forward = forward

    def __repr__(self) -> str:
        kind = 'forward' if self.forward else 'reverse'
        return (f"DirectedArc({kind}, to={self.target}, "
                f"flow={self.flow}/{self.original_capacity}, residual={self.residual_capacity})")


class FlowNetwork(BaseGraph):
    """Max-flow network solved with Dinic's algorithm.

    The network is built once for a fixed vertex count and mutated by
    ``add_edge`` and ``max_flow``. Rebuild it to compute a fresh flow.
    """

    def __init__(self, vertex_count: int):
        self.logger = logging.getLogger(__name__)
        if not isinstance(vertex_count, Integral) or vertex_count < 0:
            raise InvalidArgument(f"Vertex count must be a non-negative integer, got {vertex_count!r}")
        self.n = vertex_count
        self.graph: List[List[DirectedArc]] = [[] for _ in range(vertex_count)]
        self.level: List[int] = [UNREACHED] * vertex_count
        self.ptr: List[int] = [0] * vertex_count
        self._edge_count = 0

    def add_edge(self, u: int, v: int, capacity: int) -> DirectedArc:
        """Append a forward arc u -> v and its paired reverse arc v -> u."""
        self._check_vertex(u, 'source vertex')
        self._check_vertex(v, 'target vertex')
        if capacity < 0:
            raise InvalidArgument(f"Capacity of edge {u}->{v} must be non-negative, got {capacity}")

        # For a self loop both arcs land in the same list, so the forward arc
        # sits one position before the reverse arc.
        forward = DirectedArc(v, len(self.graph[v]) + (1 if u == v else 0), capacity)
        backward = DirectedArc(u, len(self.graph[u]), 0, forward=False)
        self.graph[u].append(forward)
        self.graph[v].append(backward)
        self._edge_count += 1
        return forward

    def reverse_of(self, arc: DirectedArc) -> DirectedArc:
        return self.graph[arc.target][arc.reverse_index]

    def max_flow(self, source: int, sink: int) -> int:
        """Push as much flow as possible from source to sink.

        Arcs are updated in place. Calling this again on the same network
        only adds whatever the remaining residual capacity allows.
        """
        self._check_vertex(source, 'source')
        self._check_vertex(sink, 'sink')
        if source == sink:
            self.logger.debug("Source equals sink, no augmenting path of positive length")
            return 0

        flow = 0
        phase = 0
        while self._assign_levels(source, sink):
            phase += 1
            for i in range(self.n):
                self.ptr[i] = 0
            phase_flow = 0
            while True:
                pushed = self._augment(source, sink)
                if pushed == 0:
                    break
                phase_flow += pushed
            self.logger.debug(f"Phase {phase}: sink at level {self.level[sink]}, pushed {phase_flow}")
            flow += phase_flow

        self.logger.debug(f"Max flow {source}->{sink} = {flow} after {phase} phases")
        return flow

    def _assign_levels(self, source: int, sink: int) -> bool:
        """BFS over arcs with residual capacity; True if the sink is reached."""
        for i in range(self.n):
            self.level[i] = UNREACHED
        self.level[source] = 0
        queue: Deque[int] = deque([source])
        while queue:
            u = queue.popleft()
            for arc in self.graph[u]:
                if arc.residual_capacity > 0 and self.level[arc.target] == UNREACHED:
                    self.level[arc.target] = self.level[u] + 1
                    queue.append(arc.target)
        return self.level[sink] != UNREACHED

    def _augment(self, source: int, sink: int) -> int:
        """Find one augmenting path in the level graph and apply it.

        Iterative form of the blocking-flow DFS. ``ptr[u]`` only moves past an
        arc once that arc is unusable or has led to a dead end, and it is
        never moved back within a phase.
        """
        vertices = [source]
        path: List[DirectedArc] = []
        while vertices:
            u = vertices[-1]
            if u == sink:
                pushed = min(arc.residual_capacity for arc in path)
                for arc in path:
                    reverse = self.reverse_of(arc)
                    arc.residual_capacity -= pushed
                    reverse.residual_capacity += pushed
                    arc.flow += pushed
                    reverse.flow -= pushed
                return pushed

            adjacency = self.graph[u]
            next_level = self.level[u] + 1
            while self.ptr[u] < len(adjacency):
                arc = adjacency[self.ptr[u]]
                if arc.residual_capacity > 0 and self.level[arc.target] == next_level:
                    break
                self.ptr[u] += 1

            if self.ptr[u] < len(adjacency):
                arc = adjacency[self.ptr[u]]
                path.append(arc)
                vertices.append(arc.target)
            else:
                # Dead end: retreat and retire the arc that led here.
                vertices.pop()
                if path:
                    path.pop()
                    self.ptr[vertices[-1]] += 1
        return 0

    def edges(self) -> Iterator[Tuple[int, DirectedArc]]:
        """Yield (u, arc) for every forward arc in insertion order per vertex."""
        for u, adjacency in enumerate(self.graph):
            for arc in adjacency:
                if arc.forward:
                    yield u, arc

    def edge_flows(self) -> List[EdgeFlow]:
        return [
            EdgeFlow(u, arc.target, arc.flow, arc.original_capacity)
            for u, arc in self.edges()
        ]

    def residual_reachable(self, source: int) -> Set[int]:
        """Vertices reachable from source through arcs with residual capacity."""
        self._check_vertex(source, 'source')
        seen = {source}
        queue = deque([source])
        while queue:
            u = queue.popleft()
            for arc in self.graph[u]:
                if arc.residual_capacity > 0 and arc.target not in seen:
                    seen.add(arc.target)
                    queue.append(arc.target)
        return seen

    def compute_flow(self, source: int, sink: int) -> Tuple[int, List[EdgeFlow]]:
        flow_value = self.max_flow(source, sink)
        return flow_value, self.edge_flows()

    # Required BaseGraph interface methods
    def num_vertices(self) -> int:
        return self.n

    def num_edges(self) -> int:
        return self._edge_count

    def has_vertex(self, vertex_id: int) -> bool:
        return (isinstance(vertex_id, Integral) and not isinstance(vertex_id, bool)
                and 0 <= vertex_id < self.n)

    def get_edges(self) -> List[Tuple[int, int, Dict[str, Any]]]:
        return [
            (u, arc.target, {'capacity': arc.original_capacity, 'flow': arc.flow})
            for u, arc in self.edges()
        ]

    def get_edge_capacity(self, u: int, v: int) -> Optional[int]:
        if not self.has_vertex(u):
            return None
        capacities = [arc.original_capacity for arc in self.graph[u] if arc.forward and arc.target == v]
        return sum(capacities) if capacities else None
