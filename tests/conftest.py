"""Shared test fixtures for all test modules."""

from typing import List

import pyarrow as pa
import pytest

from accesslog_fixtures.generator import HostSequencer


@pytest.fixture(scope="session")
def sample_batches() -> List[pa.RecordBatch]:
    """Leading batches from the default seed, at least 10k rows in total."""
    seq = HostSequencer()
    batches: List[pa.RecordBatch] = []
    while sum(b.num_rows for b in batches) < 10_000:
        batches.append(seq.next_batch())
    return batches


@pytest.fixture(scope="session")
def non_empty_batches(sample_batches: List[pa.RecordBatch]) -> List[pa.RecordBatch]:
    return [b for b in sample_batches if b.num_rows]
