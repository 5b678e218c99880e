"""Command-line entry point for parsing one genotype upload."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import Sequence

from snphub import __version__
from snphub.config import LOG_LEVELS, IngestSettings, build_settings
from snphub.errors import ConfigError, SNPHubError
from snphub.logs import configure_logging
from snphub.pipeline import IngestionPipeline, IngestionRunReport
from snphub.storage import DuckDBCatalogStorage


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Parse a raw genotype file into the SNP and user-SNP catalogs"
    )
    parser.add_argument("--config", help="Optional JSON config file; flags override its values")
    parser.add_argument("--database", help="Path of the DuckDB catalog database")
    parser.add_argument("--genotype-id", dest="genotype_id", help="ID of the genotype we're parsing")
    parser.add_argument("--temp-file", dest="temp_file", help="Path of the file we're parsing")
    parser.add_argument("--root-path", dest="root_path", help="Root path; logs go to <root>/log")
    parser.add_argument("--log-level", dest="log_level", choices=LOG_LEVELS, default=None)
    parser.add_argument(
        "--create-schema",
        dest="create_schema",
        action="store_true",
        default=None,
        help="Create the catalog tables if they do not exist",
    )
    parser.add_argument(
        "--no-maintenance",
        dest="maintenance",
        action="store_false",
        default=None,
        help="Skip VACUUM ANALYZE / CHECKPOINT after the commit",
    )
    parser.add_argument("-v", "--version", action="store_true", help="Print current version")
    return parser.parse_args(argv)


def run(settings: IngestSettings) -> IngestionRunReport:
    """Open the catalogs and run the pipeline for one upload."""

    with DuckDBCatalogStorage(db_path=settings.db_path) as storage:
        if settings.create_schema:
            storage.ensure_schema()
        return IngestionPipeline(
            storage=storage,
            genotype_id=settings.genotype_id,
            input_path=settings.input_path,
            maintain=settings.maintenance,
        ).run()


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    if args.version:
        print(f"Version is: {__version__}")
        return 0

    overrides = {
        "database": args.database,
        "genotype_id": args.genotype_id,
        "temp_file": args.temp_file,
        "root_path": args.root_path,
        "log_level": args.log_level,
        "create_schema": args.create_schema,
        "maintenance": args.maintenance,
    }
    try:
        settings = build_settings(overrides, config_path=args.config)
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    configure_logging(settings.log_level, settings.log_file)
    logger = logging.getLogger("snphub.cli")
    logger.info("Started worker")

    try:
        report = run(settings)
    except SNPHubError as exc:
        logger.critical("%s: %s", type(exc).__name__, exc)
        return 1

    print(json.dumps(asdict(report), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
