"""Identifier compaction and sparse vector primitives."""

from .identifiers import IdentifierSet, UnknownIdentifierError, build_identifier_set  # noqa: F401
from .sparse import SparseVector, new_sparse_matrix  # noqa: F401
