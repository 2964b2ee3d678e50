from typing import Dict, List, Tuple, Set, Iterable
from collections import deque, defaultdict

from ..base import EdgeFlow


def build_flow_dict(edge_flows: Iterable[EdgeFlow]) -> Dict[int, Dict[int, int]]:
    """Aggregate positive flow per ordered pair; parallel edges are summed."""
    flow_dict: Dict[int, Dict[int, int]] = defaultdict(dict)
    for edge in edge_flows:
        if edge.flow > 0 and edge.source != edge.target:
            flow_dict[edge.source][edge.target] = flow_dict[edge.source].get(edge.target, 0) + edge.flow
    return dict(flow_dict)

def find_flow_path(flow_dict: Dict[int, Dict[int, int]], source: int, sink: int) -> List[int]:
    """Find a path with positive flow using iterative DFS."""
    visited = {source}
    path = [source]
    stack = [(source, iter(flow_dict.get(source, {}).items()))]

    while stack:
        current, edges = stack[-1]
        try:
            next_node, flow = next(edges)
            if flow > 0 and next_node not in visited:
                if next_node == sink:
                    path.append(next_node)
                    return path
                visited.add(next_node)
                path.append(next_node)
                stack.append((next_node, iter(flow_dict.get(next_node, {}).items())))
        except StopIteration:
            stack.pop()
            if path:
                path.pop()

    return []

def update_residual_graph(residual_flow: Dict[int, Dict[int, int]], path: List[int],
                          path_flow: int) -> None:
    """Remove path_flow from every edge along path, dropping emptied entries."""
    for u, v in zip(path[:-1], path[1:]):
        residual_flow[u][v] -= path_flow
        if residual_flow[u][v] == 0:
            del residual_flow[u][v]
        if not residual_flow[u]:
            del residual_flow[u]

def verify_flow_conservation(edge_flows: List[EdgeFlow], source: int, sink: int) -> bool:
    """Verify flow conservation at intermediate nodes."""
    balance: Dict[int, int] = defaultdict(int)
    for edge in edge_flows:
        balance[edge.source] -= edge.flow
        balance[edge.target] += edge.flow
    return all(
        delta == 0
        for node, delta in balance.items()
        if node not in (source, sink)
    )

def verify_capacity_constraints(edge_flows: List[EdgeFlow]) -> bool:
    """Check 0 <= flow <= capacity on every edge."""
    return all(0 <= edge.flow <= edge.capacity for edge in edge_flows)

def build_residual_graph(edge_flows: List[EdgeFlow]) -> Dict[int, Dict[int, int]]:
    """Residual capacities implied by a set of edge flows."""
    residual: Dict[int, Dict[int, int]] = defaultdict(lambda: defaultdict(int))
    for edge in edge_flows:
        residual[edge.source][edge.target] += edge.capacity - edge.flow
        residual[edge.target][edge.source] += edge.flow
    return residual

def residual_reachable(residual: Dict[int, Dict[int, int]], source: int) -> Set[int]:
    """BFS over residual edges with positive capacity."""
    seen = {source}
    queue = deque([source])
    while queue:
        node = queue.popleft()
        for next_node, capacity in residual.get(node, {}).items():
            if capacity > 0 and next_node not in seen:
                seen.add(next_node)
                queue.append(next_node)
    return seen

def cut_capacity(edge_flows: List[EdgeFlow], source_side: Set[int]) -> int:
    """Total capacity of edges leaving source_side."""
    return sum(
        edge.capacity for edge in edge_flows
        if edge.source in source_side and edge.target not in source_side
    )

def calculate_flow_metrics(paths: List[Tuple[List[int], int]],
                           edge_flows: List[EdgeFlow]) -> Dict[str, float]:
    """Calculate flow metrics."""
    used_edges = [edge for edge in edge_flows if edge.flow > 0]
    saturated = [edge for edge in edge_flows if edge.status == 'saturated']
    if not paths:
        return {
            'total_flow': 0,
            'num_paths': 0,
            'average_path_flow': 0,
            'max_path_flow': 0,
            'min_path_flow': 0,
            'used_edges': len(used_edges),
            'saturated_edges': len(saturated),
        }

    flows = [flow for _, flow in paths]
    total_flow = sum(flows)

    metrics = {
        'total_flow': total_flow,
        'num_paths': len(paths),
        'average_path_flow': total_flow / len(paths),
        'max_path_flow': max(flows),
        'min_path_flow': min(flows),
        'used_edges': len(used_edges),
        'saturated_edges': len(saturated),
    }

    # Add path length statistics (edges per path)
    path_lengths = [len(path) - 1 for path, _ in paths]
    metrics.update({
        'average_path_length': sum(path_lengths) / len(path_lengths),
        'max_path_length': max(path_lengths),
        'min_path_length': min(path_lengths),
    })

    return metrics
