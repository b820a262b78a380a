#!/usr/bin/env python3
"""
Write the access-log parquet fixtures.

Generates a fixed number of per-host batches from the seeded generator and
writes them three times, once per statistics granularity:
- logs-no-stats.parquet
- logs-chunk-stats.parquet
- logs-page-stats.parquet

With no arguments the run is fully deterministic (40 hosts, built-in seed,
current directory).
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from accesslog_fixtures.config import load_config
from accesslog_fixtures.generator import HostSequencer
from accesslog_fixtures.writer import write_fixtures


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Generate access-log parquet fixtures")
    ap.add_argument("--config", default=None, help="Path to YAML config (e.g., configs/fixtures.yaml)")
    ap.add_argument("--out", default=None, help="Output dir override (default from config output.dir)")
    ap.add_argument("--hosts", type=int, default=None, help="Host count override (default from config generation.hosts)")
    args = ap.parse_args(argv)

    conf = load_config(args.config)
    if args.out is not None:
        conf.output_dir = Path(args.out)
    if args.hosts is not None:
        if args.hosts <= 0:
            ap.error("--hosts must be positive")
        conf.hosts = args.hosts

    sequencer = HostSequencer(seed=conf.seed)
    batches = sequencer.take(conf.hosts)

    write_fixtures(conf.output_dir, batches, conf.variants, compression=conf.compression, schema=sequencer.schema)


if __name__ == "__main__":
    main()
