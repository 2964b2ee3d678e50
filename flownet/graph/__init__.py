from .base import BaseGraph, GraphCreator, EdgeFlow, InvalidArgument
from .dinic_graph import FlowNetwork, DirectedArc
from .networkx_graph import NetworkXGraph
from .flow.analysis import NetworkFlowAnalysis, FlowResult

__all__ = [
    'BaseGraph',
    'GraphCreator',
    'EdgeFlow',
    'InvalidArgument',
    'FlowNetwork',
    'DirectedArc',
    'NetworkXGraph',
    'NetworkFlowAnalysis',
    'FlowResult'
]
