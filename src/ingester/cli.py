"""Command-line entry point: decode a product catalog into the configured store.

Usage:
    ingester catalog.txt
    ingester s3://bucket/catalogs/2024-05.txt --store dynamodb
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Iterable

from ingester.core.config import AppSettings
from ingester.core.exceptions import DecodeError, FileStoreError, IngesterError, RecordStoreError
from ingester.core.logging_config import get_logger, setup_logging
from ingester.core.protocols import IRecordStore
from ingester.decoding.decoder import RecordDecoder
from ingester.decoding.pipeline import StreamingPipeline, drain
from ingester.models.layout import load_layout
from ingester.models.record import Record
from ingester.persistence import create_file_store, create_record_store
from ingester.persistence.s3_backend import S3_SCHEME, parse_s3_url
from ingester.sources.lines import iter_lines, split_lines

logger = get_logger("cli")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ingester",
        description="Decode a fixed-width product catalog and store each record",
    )
    parser.add_argument("source", nargs="?", help="Catalog file path or s3://bucket/key")
    parser.add_argument("--layout", help="JSON record layout (default: reference layout)")
    parser.add_argument(
        "--store", choices=["console", "memory", "dynamodb"], help="Destination record store",
    )
    parser.add_argument("--log-level", help="Logging level (default: from settings)")
    return parser.parse_args(argv)


async def ingest(
    lines: Iterable[bytes], decoder: RecordDecoder, store: IRecordStore
) -> tuple[int, int, int]:
    """Run the pipeline over ``lines``, inserting each record into ``store``.

    Returns:
        Tuple of (stored, decode_errors, insert_errors).
    """
    insert_errors = 0

    def on_record(record: Record) -> None:
        nonlocal insert_errors
        try:
            store.insert(record)
        except RecordStoreError as exc:
            insert_errors += 1
            logger.error("%s", exc)

    def on_error(error: DecodeError) -> None:
        logger.debug("Skipped line %d (%s)", error.line, error.kind)

    pipeline = StreamingPipeline(lines, decoder)
    records, errors = await drain(pipeline.parse(), on_record, on_error)
    await pipeline.join()
    return records - insert_errors, errors, insert_errors


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = AppSettings()
    setup_logging(args.log_level or settings.log_level)

    if not args.source:
        print("usage: ingester <filename>", file=sys.stderr)
        return 1
    if args.store:
        settings = settings.model_copy(update={"store": args.store})

    try:
        layout = load_layout(args.layout or settings.layout.path)
        decoder = RecordDecoder.from_layout(layout, settings.layout.tax_rate)
        store = create_record_store(settings)
    except IngesterError as exc:
        logger.error("%s", exc)
        return 1

    try:
        if args.source.startswith(S3_SCHEME):
            bucket, key = parse_s3_url(args.source)
            data = create_file_store(settings, bucket=bucket).read(key)
            counts = asyncio.run(ingest(split_lines(data), decoder, store))
        else:
            with open(args.source, "rb") as fp:
                counts = asyncio.run(ingest(iter_lines(fp), decoder, store))
    except FileStoreError as exc:
        logger.error("%s", exc)
        return 1
    except OSError as exc:
        logger.error("Error opening file %s: %s", args.source, exc)
        return 1

    stored, decode_errors, insert_errors = counts
    logger.info(
        "Ingested %s: %d stored, %d skipped, %d failed inserts",
        args.source, stored, decode_errors, insert_errors,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
