from collections import Counter
from dataclasses import dataclass, field
from typing import List, Tuple, Dict, Set
import logging

import pandas as pd

from ..base import BaseGraph, EdgeFlow
from .decomposition import decompose_flow
from .utils import (
    build_flow_dict,
    build_residual_graph,
    residual_reachable,
    cut_capacity,
    calculate_flow_metrics,
)

# Configure logging for the module
logger = logging.getLogger(__name__)


@dataclass
class FlowResult:
    """Read-only view of a finished max-flow computation."""
    flow_value: int
    edge_flows: List[EdgeFlow]
    paths: List[Tuple[List[int], int]] = field(default_factory=list)
    min_cut: Set[int] = field(default_factory=set)
    cut_capacity: int = 0

    def saturated_edges(self) -> List[EdgeFlow]:
        return [edge for edge in self.edge_flows if edge.status == 'saturated']

    def status_counts(self) -> Dict[str, int]:
        counts = Counter(edge.status for edge in self.edge_flows)
        return {status: counts.get(status, 0) for status in ('unsaturated', 'partial', 'saturated')}

    def metrics(self) -> Dict[str, float]:
        return calculate_flow_metrics(self.paths, self.edge_flows)

    def to_dataframe(self) -> pd.DataFrame:
        """One row per user-specified edge: source, target, flow, capacity, status."""
        return pd.DataFrame(
            [
                {
                    'source': edge.source,
                    'target': edge.target,
                    'flow': edge.flow,
                    'capacity': edge.capacity,
                    'status': edge.status,
                }
                for edge in self.edge_flows
            ],
            columns=['source', 'target', 'flow', 'capacity', 'status'],
        )


class NetworkFlowAnalysis:
    """Handle flow analysis for all graph implementations."""

    def __init__(self, graph: BaseGraph):
        self.graph = graph
        self.logger = logging.getLogger(__name__)

    def analyze_flow(self, source: int, sink: int) -> FlowResult:
        """
        Analyze flow between source and sink nodes.

        Args:
            source: Source vertex index
            sink: Sink vertex index

        Returns:
            FlowResult with the flow value, per-edge flows, the path
            decomposition and the source side of the minimum cut.
        """
        self.logger.info(
            f"Computing flow from {source} to {sink} with {self.graph.__class__.__name__} "
            f"({self.graph.num_vertices()} vertices, {self.graph.num_edges()} edges)"
        )
        flow_value, edge_flows = self.graph.compute_flow(source, sink)
        self.logger.info(f"Found max flow: {flow_value}")

        paths = decompose_flow(build_flow_dict(edge_flows), source, sink)
        min_cut = self._source_side(edge_flows, source)

        return FlowResult(
            flow_value=flow_value,
            edge_flows=edge_flows,
            paths=paths,
            min_cut=min_cut,
            cut_capacity=cut_capacity(edge_flows, min_cut),
        )

    def _source_side(self, edge_flows: List[EdgeFlow], source: int) -> Set[int]:
        """Prefer the backend's own residual view, fall back to the edge flows."""
        reachable = getattr(self.graph, 'residual_reachable', None)
        if reachable is not None:
            return reachable(source)
        return residual_reachable(build_residual_graph(edge_flows), source)
