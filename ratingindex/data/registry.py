"""
Descriptors for the public rating datasets that `load_builtin` can fetch.

Registries are plain read-only mappings handed to the loader by the caller, so
projects can extend or replace them from configuration without touching
module state.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

SUPPORTED_FORMATS = ("csv", "netflix")


@dataclass(frozen=True)
class BuiltInDataset:
    """Where a dataset archive lives and how to read the ratings file inside it."""

    name: str
    url: str
    path: str
    sep: str = ","
    header: bool = False
    format: str = "csv"

    def __post_init__(self) -> None:
        if self.format not in SUPPORTED_FORMATS:
            raise ValueError(
                f"Dataset '{self.name}' has unsupported format '{self.format}'; "
                f"expected one of {SUPPORTED_FORMATS}"
            )


_DEFAULT_DATASETS = (
    BuiltInDataset(
        name="ml-100k",
        url="https://cdn.sine-x.com/datasets/movielens/ml-100k.zip",
        path="ml-100k/u.data",
        sep="\t",
    ),
    BuiltInDataset(
        name="ml-1m",
        url="https://cdn.sine-x.com/datasets/movielens/ml-1m.zip",
        path="ml-1m/ratings.dat",
        sep="::",
    ),
    BuiltInDataset(
        name="ml-10m",
        url="https://cdn.sine-x.com/datasets/movielens/ml-10m.zip",
        path="ml-10M100K/ratings.dat",
        sep="::",
    ),
    BuiltInDataset(
        name="ml-20m",
        url="https://cdn.sine-x.com/datasets/movielens/ml-20m.zip",
        path="ml-20m/ratings.csv",
        sep=",",
        header=True,
    ),
    BuiltInDataset(
        name="netflix",
        url="https://cdn.sine-x.com/datasets/netflix/netflix.zip",
        path="netflix/training_set.txt",
        format="netflix",
    ),
    BuiltInDataset(
        name="filmtrust",
        url="https://cdn.sine-x.com/datasets/filmtrust/filmtrust.zip",
        path="filmtrust/ratings.txt",
        sep=" ",
    ),
    BuiltInDataset(
        name="epinions",
        url="https://cdn.sine-x.com/datasets/epinions/epinions.zip",
        path="epinions/ratings_data.txt",
        sep=" ",
        header=True,
    ),
)

DEFAULT_REGISTRY: Mapping[str, BuiltInDataset] = MappingProxyType(
    {dataset.name: dataset for dataset in _DEFAULT_DATASETS}
)


def resolve_dataset(name: str, registry: Mapping[str, BuiltInDataset]) -> BuiltInDataset:
    try:
        return registry[name]
    except KeyError as exc:
        known = ", ".join(sorted(registry))
        raise KeyError(f"No such dataset '{name}' (known datasets: {known})") from exc


def registry_from_config(
    config: Mapping[str, Any],
    base: Mapping[str, BuiltInDataset] = DEFAULT_REGISTRY,
) -> Mapping[str, BuiltInDataset]:
    """
    Merge the ``datasets`` section of a configuration into ``base``.

    Entries are keyed by dataset name and accept the BuiltInDataset fields
    except ``name``. Entries that reuse a base name replace the base descriptor.
    """
    entries = config.get("datasets") or {}
    if not isinstance(entries, Mapping):
        raise ValueError("'datasets' configuration section must be a mapping.")

    merged = dict(base)
    for name, fields in entries.items():
        if not isinstance(fields, Mapping):
            raise ValueError(f"Dataset '{name}' configuration must be a mapping.")
        try:
            merged[str(name)] = BuiltInDataset(
                name=str(name),
                url=str(fields["url"]),
                path=str(fields["path"]),
                sep=str(fields.get("sep", ",")),
                header=bool(fields.get("header", False)),
                format=str(fields.get("format", "csv")),
            )
        except KeyError as exc:
            raise ValueError(f"Dataset '{name}' is missing required field {exc}") from exc
    return MappingProxyType(merged)
