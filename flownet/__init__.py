from .graph_manager import GraphManager
from .data_ingestion import DataIngestion, parse_capacity, validate_edge_edit
from .graph import FlowNetwork, NetworkXGraph, InvalidArgument, EdgeFlow
from .graph.flow import NetworkFlowAnalysis, FlowResult

__all__ = [
    'GraphManager',
    'DataIngestion',
    'parse_capacity',
    'validate_edge_edit',
    'FlowNetwork',
    'NetworkXGraph',
    'InvalidArgument',
    'EdgeFlow',
    'NetworkFlowAnalysis',
    'FlowResult'
]
