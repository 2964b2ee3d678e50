from typing import Dict, List, Optional
import argparse
import logging
import os
import time

from dotenv import load_dotenv

from .graph_manager import GraphManager
from .graph.flow import FlowResult, NetworkFlowAnalysis

logger = logging.getLogger(__name__)

GRAPH_TYPES = ('dinic', 'networkx')


def load_config() -> Dict[str, str]:
    """Load settings from the environment (and a .env file if present)."""
    load_dotenv()

    config = {
        'graph_type': os.getenv('FLOWNET_GRAPH_TYPE', 'dinic'),
        'log_level': os.getenv('FLOWNET_LOG_LEVEL', 'INFO').upper(),
    }
    if config['graph_type'] not in GRAPH_TYPES:
        raise ValueError(f"FLOWNET_GRAPH_TYPE must be one of {', '.join(GRAPH_TYPES)}")
    return config


def configure_logging(level_name: str):
    """Apply the configured log level to the root logger."""
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format='[%(asctime)s] %(levelname)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    # basicConfig leaves an already configured root logger alone
    logging.getLogger().setLevel(level)


def parse_args(argv: Optional[List[str]] = None, config: Optional[Dict[str, str]] = None) -> argparse.Namespace:
    config = config or load_config()
    parser = argparse.ArgumentParser(
        description="Compute maximum flow over a capacity matrix (vertex 0 -> vertex n-1)."
    )
    parser.add_argument('matrix', help="Headerless CSV capacity matrix")
    parser.add_argument('--graph-type', choices=GRAPH_TYPES, default=config['graph_type'],
                        help="Flow backend (default from FLOWNET_GRAPH_TYPE)")
    parser.add_argument('--source', type=int, default=None, help="Source vertex (default 0)")
    parser.add_argument('--sink', type=int, default=None, help="Sink vertex (default n-1)")
    parser.add_argument('--output', default=None, help="Write per-edge results to this CSV file")
    return parser.parse_args(argv)


def write_results(result: FlowResult, path: str):
    """Write per-edge flow results to CSV."""
    result.to_dataframe().to_csv(path, index=False)
    logger.info(f"Results written to {path}")


def print_results(result: FlowResult, manager: GraphManager, execution_time: float):
    print(f"\nMaximum flow: {result.flow_value}")
    print(f"Computation time: {execution_time:.6f}s")
    counts = result.status_counts()
    print(f"Edges: {len(result.edge_flows)} "
          f"(saturated {counts['saturated']}, partial {counts['partial']}, unused {counts['unsaturated']})")

    print("\nEdge flows:")
    print("-" * 40)
    for edge in result.edge_flows:
        print(f"{manager.node_label(edge.source):>4} -> {manager.node_label(edge.target):<4} "
              f"{edge.flow}/{edge.capacity}  {edge.status}")

    print(f"\nMinimum cut (source side): {sorted(result.min_cut)}, capacity {result.cut_capacity}")


def analyze_endpoints(manager: GraphManager, source: Optional[int] = None,
                      sink: Optional[int] = None) -> FlowResult:
    """Rebuild the manager's network and analyze flow between explicit endpoints."""
    if source is None and sink is None:
        return manager.calculate_max_flow()
    source = manager.source if source is None else source
    sink = manager.sink if sink is None else sink
    manager.graph = manager.build_graph()
    manager.result = NetworkFlowAnalysis(manager.graph).analyze_flow(source, sink)
    return manager.result


def run_analysis(args: argparse.Namespace) -> FlowResult:
    manager = GraphManager.from_csv(args.matrix, graph_type=args.graph_type)
    start_time = time.time()
    result = analyze_endpoints(manager, args.source, args.sink)

    print_results(result, manager, time.time() - start_time)
    if args.output:
        write_results(result, args.output)
    return result


def main(argv: Optional[List[str]] = None) -> int:
    try:
        config = load_config()
        configure_logging(config['log_level'])
        args = parse_args(argv, config)
        run_analysis(args)
    except Exception as e:
        logger.error(f"Error: {str(e)}")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
