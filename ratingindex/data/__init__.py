"""Raw tables, dataset indexes and the loaders that produce them."""

from .dataset import DatasetIndex, build_dataset_index, summarize_dataset  # noqa: F401
from .datasets import RatingDataset  # noqa: F401
from .download import download_from_url, unzip  # noqa: F401
from .loaders import (  # noqa: F401
    MalformedRecordError,
    load_builtin,
    load_csv,
    load_netflix,
    read_csv_table,
    read_netflix_table,
)
from .registry import (  # noqa: F401
    DEFAULT_REGISTRY,
    BuiltInDataset,
    registry_from_config,
    resolve_dataset,
)
from .table import RawTable  # noqa: F401
