import pandas as pd
from typing import Any, Optional
import logging

from .data_ingestion import DataIngestion, CapacityMatrix, parse_capacity, read_matrix_csv, validate_edge_edit
from .graph import GraphCreator, BaseGraph, InvalidArgument
from .graph.flow import NetworkFlowAnalysis, FlowResult

logger = logging.getLogger(__name__)


class GraphManager:
    def __init__(self, vertex_count: int = 0, graph_type: str = 'dinic',
                 capacity_matrix: Optional[CapacityMatrix] = None):
        """
        Hold the capacity matrix and recompute max flow from it on demand.

        Args:
            vertex_count: Number of vertices; vertex 0 is the source and
                vertex n-1 the sink
            graph_type: Backend used for every computation ('dinic' or 'networkx')
            capacity_matrix: Optional initial matrix; its size overrides vertex_count
        """
        self.logger = logging.getLogger(__name__)
        self.graph_type = graph_type
        self.graph: Optional[BaseGraph] = None
        self.result: Optional[FlowResult] = None

        if capacity_matrix is not None:
            self.data_ingestion = DataIngestion(capacity_matrix)
            self.matrix = pd.DataFrame(capacity_matrix).astype(object).reset_index(drop=True)
            self.matrix.columns = range(self.data_ingestion.vertex_count)
            self.vertex_count = self.data_ingestion.vertex_count
        else:
            self.set_vertex_count(vertex_count)

    @classmethod
    def from_csv(cls, path: str, graph_type: str = 'dinic') -> 'GraphManager':
        manager = cls(graph_type=graph_type, capacity_matrix=read_matrix_csv(path))
        logger.info(f"Loaded {manager.vertex_count}x{manager.vertex_count} matrix from {path}")
        return manager

    @property
    def source(self) -> int:
        return 0

    @property
    def sink(self) -> int:
        return self.vertex_count - 1

    def set_vertex_count(self, vertex_count: int):
        """Reset to an empty vertex_count x vertex_count matrix and drop any result."""
        if vertex_count < 0:
            raise InvalidArgument(f"Vertex count must be non-negative, got {vertex_count}")
        self.vertex_count = vertex_count
        self.matrix = pd.DataFrame(
            [[''] * vertex_count for _ in range(vertex_count)],
            columns=range(vertex_count),
            dtype=object,
        )
        self.data_ingestion = DataIngestion(self.matrix)
        self.graph = None
        self.result = None

    def set_capacity(self, i: int, j: int, value: Any):
        """Edit one matrix cell; nothing is recomputed."""
        if not (0 <= i < self.vertex_count and 0 <= j < self.vertex_count):
            raise InvalidArgument(f"Cell ({i}, {j}) outside {self.vertex_count}x{self.vertex_count} matrix")
        self.matrix.iat[i, j] = value

    def update_edge(self, u: int, v: int, capacity: Any) -> Optional[FlowResult]:
        """Apply a validated edge edit and recompute.

        Invalid edits are ignored and return None.
        """
        if not validate_edge_edit(u, v, capacity, self.vertex_count):
            self.logger.info(f"Ignoring invalid edge edit {u}->{v} capacity={capacity!r}")
            return None
        self.matrix.iat[u, v] = str(parse_capacity(capacity))
        return self.calculate_max_flow()

    def build_graph(self) -> BaseGraph:
        """Build a fresh network from the current matrix."""
        self.data_ingestion = DataIngestion(self.matrix)
        return GraphCreator.create_graph(
            self.graph_type,
            self.data_ingestion.vertex_count,
            self.data_ingestion.edges,
            self.data_ingestion.capacities
        )

    def calculate_max_flow(self) -> FlowResult:
        """Rebuild the network and compute max flow from vertex 0 to vertex n-1."""
        self.graph = self.build_graph()
        self.result = NetworkFlowAnalysis(self.graph).analyze_flow(self.source, self.sink)
        self.logger.info(
            f"Maximum flow {self.node_label(self.source)}->{self.node_label(self.sink)} = {self.result.flow_value}"
        )
        return self.result

    def node_label(self, vertex: int) -> str:
        if vertex == self.source:
            return 'S'
        if vertex == self.sink:
            return 'T'
        return str(vertex)

    def get_node_info(self) -> str:
        """Get information about nodes and edges of the last built graph."""
        graph = self.graph or self.build_graph()
        lines = [f"Total nodes: {graph.num_vertices()}", f"Total edges: {graph.num_edges()}"]
        for u, v, data in graph.get_edges():
            lines.append(f"{self.node_label(u)} -> {self.node_label(v)}: capacity {data['capacity']}")
        return "\n".join(lines)
