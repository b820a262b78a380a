"""Deterministic access-log Parquet fixtures."""

from accesslog_fixtures.builder import BatchBuilder
from accesslog_fixtures.generator import DEFAULT_SEED, HostSequencer, format_host_id
from accesslog_fixtures.schema import ACCESS_LOG_SCHEMA
from accesslog_fixtures.writer import STATS_VARIANTS, write_fixtures

__all__ = [
    "ACCESS_LOG_SCHEMA",
    "BatchBuilder",
    "DEFAULT_SEED",
    "HostSequencer",
    "STATS_VARIANTS",
    "format_host_id",
    "write_fixtures",
]
