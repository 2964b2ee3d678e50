from .analysis import NetworkFlowAnalysis, FlowResult
from .decomposition import decompose_flow
from .utils import (
    build_flow_dict,
    find_flow_path,
    update_residual_graph,
    verify_flow_conservation,
    verify_capacity_constraints,
    build_residual_graph,
    residual_reachable,
    cut_capacity,
    calculate_flow_metrics
)

__all__ = [
    'NetworkFlowAnalysis',
    'FlowResult',
    'decompose_flow',
    'build_flow_dict',
    'find_flow_path',
    'update_residual_graph',
    'verify_flow_conservation',
    'verify_capacity_constraints',
    'build_residual_graph',
    'residual_reachable',
    'cut_capacity',
    'calculate_flow_metrics',
]
