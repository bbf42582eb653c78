"""
Curve building blocks.

A building block records which columns of the shared sensitivity Jacobian
each curve's parameters occupy. Ranges never overlap across a bundle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Tuple

import numpy as np
import pandas as pd

from curvebuild.exceptions import BlockCollisionError

logger = logging.getLogger(__name__)

BlockRange = Tuple[int, int]


def _frozen_matrix(matrix) -> np.ndarray:
    array = np.array(matrix, dtype=float, copy=True)
    if array.ndim != 2:
        raise ValueError(f"Jacobian must be a 2D matrix, got shape {array.shape}")
    array.setflags(write=False)
    return array


@dataclass(frozen=True)
class CurveBuildingBlock:
    """Curve name to (start index, size) in the shared Jacobian."""

    unit_map: Mapping[str, BlockRange]

    def __post_init__(self):
        ranges = {name: (int(start), int(size)) for name, (start, size) in self.unit_map.items()}
        object.__setattr__(self, "unit_map", MappingProxyType(ranges))

    def __hash__(self) -> int:
        return hash(tuple(self.unit_map.items()))

    def start(self, name: str) -> int:
        return self.unit_map[name][0]

    def size(self, name: str) -> int:
        return self.unit_map[name][1]

    @property
    def names(self) -> List[str]:
        return list(self.unit_map)

    @property
    def total_size(self) -> int:
        return max((start + size for start, size in self.unit_map.values()), default=0)


class CurveBuildingBlockBundle:
    """Immutable curve name to (building block, Jacobian) mapping."""

    def __init__(self, blocks: Mapping[str, Tuple[CurveBuildingBlock, np.ndarray]]):
        frozen = {}
        for name, (block, jacobian) in blocks.items():
            if name not in block.unit_map:
                raise ValueError(f"Building block for {name} does not contain {name}")
            frozen[name] = (block, _frozen_matrix(jacobian))
        self._blocks = MappingProxyType(frozen)

    @property
    def blocks(self) -> Mapping[str, Tuple[CurveBuildingBlock, np.ndarray]]:
        return self._blocks

    @property
    def unit_map(self) -> Dict[str, BlockRange]:
        """Each curve's own (start, size), in bundle order."""
        return {name: block.unit_map[name] for name, (block, _) in self._blocks.items()}

    @property
    def total_size(self) -> int:
        return max((start + size for start, size in self.unit_map.values()), default=0)

    def block_for(self, name: str) -> CurveBuildingBlock:
        return self._blocks[name][0]

    def jacobian_for(self, name: str) -> np.ndarray:
        return self._blocks[name][1]

    def global_jacobian(self) -> np.ndarray:
        """
        Assemble all blocks into one matrix.

        A Jacobian with ``size`` rows is placed on the curve's rows; its
        columns end at the curve's last column, so square blocks land on the
        diagonal and wider blocks reach back over earlier curves.
        """
        n = self.total_size
        matrix = np.zeros((n, n))
        for name, (start, size) in self.unit_map.items():
            jacobian = self.jacobian_for(name)
            rows, cols = jacobian.shape
            end = start + size
            if rows != size or cols > end:
                raise ValueError(
                    f"Jacobian of {name} has shape {jacobian.shape}, "
                    f"incompatible with block ({start}, {size})"
                )
            matrix[start:end, end - cols:end] = jacobian
        return matrix

    def to_frame(self) -> pd.DataFrame:
        rows = [
            {"curve": name, "start": start, "size": size, "end": start + size}
            for name, (start, size) in self.unit_map.items()
        ]
        return pd.DataFrame(rows, columns=["curve", "start", "size", "end"])

    def __contains__(self, name: str) -> bool:
        return name in self._blocks

    def __iter__(self) -> Iterator[str]:
        return iter(self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)

    def __repr__(self) -> str:
        return f"CurveBuildingBlockBundle({self.unit_map})"


class CurveBuildingBlockBundleBuilder:
    """
    Assigns Jacobian ranges during a build.

    Exogenous bundles are merged verbatim first; new curves then take
    consecutive ranges starting at the first free index.
    """

    def __init__(self):
        self._ranges: Dict[str, BlockRange] = {}
        self._exogenous: Dict[str, Tuple[CurveBuildingBlock, np.ndarray]] = {}
        self._jacobians: Dict[str, np.ndarray] = {}
        self.total_blocks_used = 0

    def _claim(self, name: str, start: int, size: int) -> bool:
        if start < 0 or size <= 0:
            raise BlockCollisionError(name, f"Invalid block ({start}, {size}) for curve {name}")
        existing = self._ranges.get(name)
        if existing is not None:
            if existing == (start, size):
                return False
            raise BlockCollisionError(
                name, f"Curve {name} already occupies block {existing}, not ({start}, {size})"
            )
        for other, (other_start, other_size) in self._ranges.items():
            if start < other_start + other_size and other_start < start + size:
                raise BlockCollisionError(
                    name,
                    f"Block ({start}, {size}) of curve {name} overlaps "
                    f"block ({other_start}, {other_size}) of curve {other}",
                )
        self._ranges[name] = (start, size)
        return True

    def merge(self, bundle: CurveBuildingBlockBundle) -> None:
        """Merge an exogenous bundle's blocks without moving them."""
        if self._jacobians:
            raise ValueError("Exogenous bundles must be merged before new curves are added")
        for name, (block, jacobian) in bundle.blocks.items():
            start, size = block.unit_map[name]
            if self._claim(name, start, size):
                self._exogenous[name] = (block, jacobian)
                self.total_blocks_used = max(self.total_blocks_used, start + size)

    def add(self, name: str, jacobian) -> BlockRange:
        """
        Give a newly calibrated curve the next free range.

        The range size is the number of Jacobian rows.
        """
        matrix = _frozen_matrix(jacobian)
        start, size = self.total_blocks_used, matrix.shape[0]
        self._claim(name, start, size)
        self._jacobians[name] = matrix
        self.total_blocks_used += size
        logger.debug("Curve %s assigned block (%s, %s)", name, start, size)
        return start, size

    def build(self) -> CurveBuildingBlockBundle:
        block = CurveBuildingBlock(self._ranges)
        blocks = dict(self._exogenous)
        for name, jacobian in self._jacobians.items():
            blocks[name] = (block, jacobian)
        return CurveBuildingBlockBundle(blocks)
