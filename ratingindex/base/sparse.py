"""Append-only sparse vectors used by the per-user and per-item rating indices."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class SparseVector:
    """
    Ordered ``(index, value)`` pairs.

    Repeated indices are kept as separate pairs; nothing is merged or
    overwritten on insertion.
    """

    indices: list[int] = field(default_factory=list)
    values: list[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.indices) != len(self.values):
            raise ValueError(
                f"indices and values must have equal length "
                f"(got {len(self.indices)} and {len(self.values)})"
            )

    def __len__(self) -> int:
        return len(self.indices)

    def __iter__(self) -> Iterator[tuple[int, float]]:
        return zip(self.indices, self.values)

    def add(self, index: int, value: float) -> None:
        self.indices.append(index)
        self.values.append(value)

    def total(self) -> float:
        return float(sum(self.values))


def new_sparse_matrix(size: int) -> list[SparseVector]:
    """Return ``size`` independent, empty sparse vectors."""
    if size < 0:
        raise ValueError("size must be non-negative.")
    return [SparseVector() for _ in range(size)]
