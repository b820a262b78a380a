"""Batch builder: one growable column buffer per schema field, bound into a RecordBatch."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping

import numpy as np
import pyarrow as pa

from accesslog_fixtures.schema import ACCESS_LOG_SCHEMA, STRUCTURAL_FIELDS


@dataclass(frozen=True)
class RowContext:
    """Identifiers shared by every row of one container."""
    service: str
    host: str
    pod: str
    container: str
    image: str


class BatchBuilder:
    """
    Column buffers for one host's batch.

    Each schema field gets a growable list of Arrow chunks. Rows are appended a
    container at a time and `finish` binds everything into a single
    RecordBatch. A builder is single use: after `finish` it refuses further
    appends.
    """

    def __init__(self, schema: pa.Schema = ACCESS_LOG_SCHEMA) -> None:
        self.schema = schema
        self._columns: Dict[str, List[pa.Array]] = {f.name: [] for f in schema}
        self._num_rows = 0
        self._finished = False

    @property
    def num_rows(self) -> int:
        return self._num_rows

    def _check_open(self) -> None:
        if self._finished:
            raise RuntimeError("BatchBuilder already finished")

    def append_rows(self, ctx: RowContext, times: np.ndarray, values: Mapping[str, pa.Array]) -> None:
        """Append len(times) rows: structural columns from ctx, the rest from values."""
        self._check_open()
        n = len(times)

        expected = set(self._columns) - set(STRUCTURAL_FIELDS)
        if set(values) != expected:
            missing = sorted(expected - set(values))
            extra = sorted(set(values) - expected)
            raise ValueError(f"row values do not match schema (missing={missing}, extra={extra})")
        for name, arr in values.items():
            if len(arr) != n:
                raise ValueError(f"column {name!r} has {len(arr)} values, expected {n}")

        self._columns["service"].append(pa.repeat(ctx.service, n))
        self._columns["host"].append(pa.repeat(ctx.host, n))
        self._columns["pod"].append(pa.repeat(ctx.pod, n))
        self._columns["container"].append(pa.repeat(ctx.container, n))
        self._columns["image"].append(pa.repeat(ctx.image, n))
        self._columns["time"].append(pa.array(np.asarray(times, dtype=np.int64).astype("datetime64[us]")))
        for name, arr in values.items():
            self._columns[name].append(arr)

        self._num_rows += n

    def finish(self) -> pa.RecordBatch:
        self._check_open()
        self._finished = True

        arrays: List[pa.Array] = []
        for field in self.schema:
            chunks = self._columns[field.name]
            if not chunks:
                arr = pa.array([], type=field.type)
            else:
                arr = pa.concat_arrays([c.cast(field.type) for c in chunks])
            if len(arr) != self._num_rows:
                raise ValueError(f"column {field.name!r} has {len(arr)} rows, expected {self._num_rows}")
            if not field.nullable and arr.null_count:
                raise ValueError(f"non-nullable column {field.name!r} contains {arr.null_count} nulls")
            arrays.append(arr)

        self._columns = {}
        return pa.RecordBatch.from_arrays(arrays, schema=self.schema)
