"""
Identifier sets that map sparse raw IDs to contiguous dense indices.

Dense indices are handed out in first-seen order, so scanning the same records
in the same order always yields the same assignment.
"""

from __future__ import annotations

from typing import Iterable, Sequence


class UnknownIdentifierError(KeyError):
    """Raised when a sparse ID was never registered with an IdentifierSet."""

    def __init__(self, sparse_id: int) -> None:
        super().__init__(f"ID {sparse_id} missing from identifier set")
        self.sparse_id = sparse_id


class IdentifierSet:
    """Bidirectional mapping between sparse IDs and the dense range [0, count)."""

    def __init__(self) -> None:
        self._dense_ids: dict[int, int] = {}
        self._sparse_ids: list[int] = []

    def __len__(self) -> int:
        return len(self._sparse_ids)

    def __contains__(self, sparse_id: object) -> bool:
        return sparse_id in self._dense_ids

    def __repr__(self) -> str:
        return f"IdentifierSet(count={len(self)})"

    @property
    def sparse_ids(self) -> Sequence[int]:
        """Sparse IDs ordered by their dense index."""
        return tuple(self._sparse_ids)

    def add(self, sparse_id: int) -> int:
        """Register ``sparse_id`` if unseen and return its dense index."""
        dense_id = self._dense_ids.get(sparse_id)
        if dense_id is None:
            dense_id = len(self._sparse_ids)
            self._dense_ids[sparse_id] = dense_id
            self._sparse_ids.append(sparse_id)
        return dense_id

    def to_dense(self, sparse_id: int) -> int:
        try:
            return self._dense_ids[sparse_id]
        except KeyError as exc:
            raise UnknownIdentifierError(sparse_id) from exc

    def to_sparse(self, dense_id: int) -> int:
        # Negative positions would silently wrap around on a list.
        if not 0 <= dense_id < len(self._sparse_ids):
            raise IndexError(
                f"Dense index {dense_id} out of bounds for identifier set of size {len(self)}"
            )
        return self._sparse_ids[dense_id]


def build_identifier_set(values: Iterable[int]) -> IdentifierSet:
    """
    Create an IdentifierSet that preserves the order of first appearance.

    Parameters
    ----------
    values:
        Iterable of sparse identifiers (user IDs, item IDs).
    """
    id_set = IdentifierSet()
    for value in values:
        id_set.add(int(value))
    return id_set
