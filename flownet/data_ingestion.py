import re
import pandas as pd
import numpy as np
from numbers import Integral
from typing import List, Tuple, Optional, Any, Union, Sequence
import logging

from .graph.base import InvalidArgument

logger = logging.getLogger(__name__)

CapacityMatrix = Union[pd.DataFrame, Sequence[Sequence[Any]]]

INTEGER_CELL = re.compile(r"[+-]?\d+")


def parse_capacity(value: Any) -> Optional[int]:
    """Parse one capacity cell, truncating toward zero. None if it does not parse.

    Integer text and integer values are taken exactly; anything else goes
    through float parsing.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Integral):
        return int(value)
    if isinstance(value, str):
        value = value.strip()
        if INTEGER_CELL.fullmatch(value):
            return int(value)
    parsed = pd.to_numeric(value, errors='coerce')
    if pd.isna(parsed) or not np.isfinite(parsed):
        return None
    return int(np.trunc(parsed))


def read_matrix_csv(path: str) -> pd.DataFrame:
    """Read a headerless CSV capacity matrix; every cell is kept as text."""
    try:
        return pd.read_csv(path, header=None, dtype=str, keep_default_na=False)
    except Exception as e:
        raise ValueError(f"Error reading CSV file: {str(e)}")


def validate_edge_edit(u: Any, v: Any, capacity: Any, vertex_count: int) -> bool:
    """Check an edge edit before it reaches the network.

    Self loops, endpoints outside [0, vertex_count) and capacities that do
    not parse are rejected. Non-positive capacities pass: writing one simply
    removes the edge at the next computation.
    """
    for vertex in (u, v):
        if not isinstance(vertex, Integral) or isinstance(vertex, bool):
            return False
    if u == v:
        return False
    if not (0 <= u < vertex_count and 0 <= v < vertex_count):
        return False
    return parse_capacity(capacity) is not None


class DataIngestion:
    def __init__(self, capacity_matrix: CapacityMatrix):
        """Turn a square capacity matrix into edge specifications.

        Cell (i, j) becomes an edge i -> j when it parses to a positive
        number. Blank, unparsable, zero and negative cells are skipped.
        Edges are emitted in row-major order.
        """
        df = capacity_matrix if isinstance(capacity_matrix, pd.DataFrame) else pd.DataFrame(list(capacity_matrix))
        rows, cols = df.shape
        if rows != cols:
            raise InvalidArgument(f"Capacity matrix must be square, got {rows}x{cols}")

        self.vertex_count = rows
        self.edges: List[Tuple[int, int]] = []
        self.capacities: List[int] = []
        self.skipped = 0

        self._process_matrix(df)
        logger.debug(f"Ingested {len(self.edges)} edges for {self.vertex_count} vertices "
                     f"({self.skipped} non-empty cells skipped)")

    def _process_matrix(self, df: pd.DataFrame):
        if self.vertex_count == 0:
            return

        raw = df.to_numpy(dtype=object)
        numeric = df.apply(
            lambda col: pd.to_numeric(col.astype(str).str.strip(), errors='coerce')
        ).to_numpy(dtype=float)

        with np.errstate(invalid='ignore'):
            truncated = np.trunc(numeric)
            mask = np.isfinite(truncated) & (truncated > 0)

        # np.argwhere walks the matrix in row-major order
        for i, j in np.argwhere(mask):
            self.edges.append((int(i), int(j)))
            self.capacities.append(parse_capacity(raw[i, j]))

        blank = np.vectorize(
            lambda cell: cell is None or str(cell).strip() in ('', 'nan', 'None'), otypes=[bool]
        )(raw)
        self.skipped = int((~mask & ~blank).sum())

    @classmethod
    def from_csv(cls, path: str) -> 'DataIngestion':
        """Read a headerless CSV capacity matrix; every cell is kept as text."""
        return cls(read_matrix_csv(path))

    def get_edge_specs(self) -> List[Tuple[int, int, int]]:
        return [(u, v, c) for (u, v), c in zip(self.edges, self.capacities)]
