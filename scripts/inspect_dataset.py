"""Load a ratings dataset, build its dual index and log headline statistics."""

from __future__ import annotations

import sys
import argparse
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

from loguru import logger

from ratingindex.data import (
    load_builtin,
    load_csv,
    load_netflix,
    registry_from_config,
    summarize_dataset,
)
from ratingindex.utils import apply_overrides, data_settings, load_config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("configs/default.yaml"),
        help="Path to the YAML configuration file.",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override a configuration value, e.g. --set data.dataset=ml-1m.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    config = apply_overrides(load_config(args.config), args.overrides)
    try:
        settings = data_settings(config)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    on_malformed = settings["on_malformed"]

    if settings["source"] == "csv":
        index = load_csv(
            Path(settings["file"]),
            sep=settings["sep"],
            header=bool(settings["header"]),
            on_malformed=on_malformed,
        )
    elif settings["source"] == "netflix":
        index = load_netflix(Path(settings["file"]), on_malformed=on_malformed)
    else:
        index = load_builtin(
            settings["dataset"],
            registry=registry_from_config(config),
            data_dir=Path(settings["root"]),
            download_dir=Path(settings["download_dir"]),
            on_malformed=on_malformed,
        )

    stats = summarize_dataset(index)
    logger.info(
        "records={} users={} items={} global_mean={:.4f} density={:.6f}",
        stats["records"],
        stats["users"],
        stats["items"],
        stats["global_mean"],
        stats["density"],
    )


if __name__ == "__main__":
    main()
