"""Helpers for slicing generated batches back into their hierarchy."""

from typing import List, NamedTuple

import pyarrow as pa


class Segment(NamedTuple):
    service: str
    pod: str
    container: str
    start: int
    stop: int


def container_segments(batch: pa.RecordBatch) -> List[Segment]:
    """Contiguous runs of rows sharing (service, pod, container)."""
    services = batch.column("service").to_pylist()
    pods = batch.column("pod").to_pylist()
    containers = batch.column("container").to_pylist()
    times = batch.column("time").cast(pa.int64()).to_pylist()

    segments: List[Segment] = []
    start = 0
    for i in range(1, batch.num_rows + 1):
        boundary = (
            i == batch.num_rows
            or times[i] == 0
            or (services[i], pods[i], containers[i]) != (services[start], pods[start], containers[start])
        )
        if boundary:
            segments.append(Segment(services[start], pods[start], containers[start], start, i))
            start = i
    return segments
