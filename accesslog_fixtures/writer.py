"""
Parquet writing for the fixtures.

The same batches are written once per statistics variant with dictionary
encoding disabled.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence

import pyarrow as pa
import pyarrow.parquet as pq

from accesslog_fixtures.schema import ACCESS_LOG_SCHEMA


@dataclass(frozen=True)
class StatsVariant:
    """One statistics granularity and the file it is written to."""
    name: str
    filename: str
    write_statistics: bool
    write_page_index: bool


# pyarrow writes page-header statistics whenever write_statistics is on, so
# "chunk" differs from "page" only by the column/offset index.
STATS_VARIANTS = (
    StatsVariant("none", "logs-no-stats.parquet", write_statistics=False, write_page_index=False),
    StatsVariant("chunk", "logs-chunk-stats.parquet", write_statistics=True, write_page_index=False),
    StatsVariant("page", "logs-page-stats.parquet", write_statistics=True, write_page_index=True),
)


def variant_for(name: str) -> StatsVariant:
    for v in STATS_VARIANTS:
        if v.name == name:
            return v
    known = [v.name for v in STATS_VARIANTS]
    raise ValueError(f"unknown statistics variant {name!r} (expected one of {known})")


def ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


def write_parquet_batches(
    path: Path,
    schema: pa.Schema,
    batches: Iterable[pa.RecordBatch],
    variant: StatsVariant,
    compression: str = "none",
) -> None:
    """Write all batches to one file; dictionary encoding is always off."""
    ensure_dir(path.parent)
    with pq.ParquetWriter(
        path,
        schema=schema,
        compression=compression,
        use_dictionary=False,
        write_statistics=variant.write_statistics,
        write_page_index=variant.write_page_index,
    ) as writer:
        for batch in batches:
            writer.write_batch(batch)


def write_fixtures(
    out_dir: Path,
    batches: Sequence[pa.RecordBatch],
    variants: Sequence[StatsVariant] = STATS_VARIANTS,
    compression: str = "none",
    schema: pa.Schema = ACCESS_LOG_SCHEMA,
) -> List[Path]:
    """One file per statistics variant, same batches in the same order."""
    written: List[Path] = []
    for variant in variants:
        path = Path(out_dir) / variant.filename
        write_parquet_batches(path, schema, batches, variant, compression=compression)
        print(f"[fixtures] wrote {path}")
        written.append(path)
    return written
