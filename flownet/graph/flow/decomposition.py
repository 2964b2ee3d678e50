from typing import Dict, List, Tuple
from .utils import find_flow_path, update_residual_graph

def decompose_flow(flow_dict: Dict[int, Dict[int, int]], source: int,
                   sink: int) -> List[Tuple[List[int], int]]:
    """Decompose a flow into source-sink paths.

    Amounts sum to the flow value; circulations that do not reach the sink
    are left out.
    """
    paths = []

    # Work on a copy so the caller's flow dictionary stays intact
    residual_flow = {u: dict(flows) for u, flows in flow_dict.items()}

    if source == sink:
        return paths

    while True:
        path = find_flow_path(residual_flow, source, sink)
        if not path:
            break

        path_flow = min(residual_flow[u][v] for u, v in zip(path[:-1], path[1:]))
        update_residual_graph(residual_flow, path, path_flow)
        paths.append((path, path_flow))

    return paths


__all__ = ['decompose_flow']
