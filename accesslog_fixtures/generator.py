"""
Seeded generator for access-log record batches.

One batch per host. For every host a random subset of services is picked,
each service gets a sorted set of random pod ids, each pod runs one or two
containers, and each container emits a run of log rows whose timestamps step
by 1024us from zero.

All randomness comes from a single numpy Generator owned by HostSequencer and
passed down explicitly. The order of draws is fixed; changing it changes
every value that follows.
"""

from __future__ import annotations

from itertools import islice
from typing import Dict, Iterator, List, Sequence

import numpy as np
import pyarrow as pa
import pyarrow.compute as pc

from accesslog_fixtures.builder import BatchBuilder, RowContext
from accesslog_fixtures.schema import (
    ACCESS_LOG_SCHEMA,
    METHODS,
    SERVICES,
    STATUSES,
    container_name,
    image_name,
    request_host,
)


DEFAULT_SEED = bytes([
    1, 0, 0, 0, 23, 0, 3, 0, 200, 1, 0, 0, 210, 30, 8, 0,
    1, 0, 21, 0, 6, 0, 0, 0, 0, 0, 5, 0, 0, 0, 0, 0,
])

HOST_STRIDE = 0x7d87f8ed5c5
HOST_OFFSET = 0x1ec3ca3151468928

SERVICE_SKIP_PROBABILITY = 0.5
POD_COUNT = (1, 15)
POD_NAME_LEN = (30, 40)
CONTAINER_COUNT = (1, 3)
ROWS_PER_CONTAINER = (1024, 8192)
TIME_STEP_US = 1024

UA_LEN = (20, 100)
PRESENT_PROBABILITY = 0.9

# Per-row word layout (uint32 words, consumed in this order)
_ADDR = 0
_DURATION = 1
_UA_LEN = 2
_UA_CHARS = slice(3, 102)  # one word per letter, up to 99 letters
_METHOD = 102
_REQ_PRESENT = 103
_REQ_VALUE = 104
_RESP_PRESENT = 105
_RESP_VALUE = 106
_STATUS = 107
ROW_WORDS = 108

_UA_MAX_CHARS = _UA_CHARS.stop - _UA_CHARS.start
_PRESENT_CUTOFF = int(PRESENT_PROBABILITY * 2**32)
_LETTER_A = np.uint8(ord("a"))

_METHOD_VALUES = pa.array(METHODS, type=pa.string())
_STATUS_VALUES = np.asarray(STATUSES, dtype=np.uint16)


# ----------------------------
# RNG helpers
# ----------------------------

def make_rng(seed: bytes = DEFAULT_SEED) -> np.random.Generator:
    """PCG64 generator seeded from raw seed bytes (little-endian integer)."""
    entropy = int.from_bytes(bytes(seed), "little")
    return np.random.Generator(np.random.PCG64(np.random.SeedSequence(entropy)))

def sample_int(rng: np.random.Generator, lo: int, hi: int) -> int:
    """Uniform integer in [lo, hi)."""
    return int(rng.integers(lo, hi))

def random_string(rng: np.random.Generator, lo: int, hi: int) -> str:
    """Lowercase ASCII string with length uniform in [lo, hi)."""
    n = sample_int(rng, lo, hi)
    codes = rng.integers(0, 26, size=n, dtype=np.uint8) + _LETTER_A
    return codes.tobytes().decode("ascii")

def generate_sorted_strings(rng: np.random.Generator, count: int, lo: int, hi: int) -> List[str]:
    strings = [random_string(rng, lo, hi) for _ in range(count)]
    strings.sort()
    return strings

def format_host_id(index: int) -> str:
    return f"i-{index * HOST_STRIDE + HOST_OFFSET:016x}.ec2.internal"


# ----------------------------
# Row synthesis
# ----------------------------

def draw_row_words(rng: np.random.Generator, count: int) -> np.ndarray:
    """Fixed-width draw block, shape (count, ROW_WORDS), row-major."""
    raw = rng.bytes(count * ROW_WORDS * 4)
    return np.frombuffer(raw, dtype="<u4").reshape(count, ROW_WORDS)

def _bounded(words: np.ndarray, lo: int, hi: int) -> np.ndarray:
    # multiply-shift maps a uint32 word onto [lo, hi)
    scaled = (words.astype(np.uint64) * np.uint64(hi - lo)) >> np.uint64(32)
    return scaled.astype(np.int64) + lo

def _word_bytes(words: np.ndarray) -> np.ndarray:
    """Split each uint32 word into its 4 little-endian bytes along the last axis."""
    contiguous = np.ascontiguousarray(words, dtype="<u4")
    return contiguous.reshape(len(contiguous), -1).view(np.uint8)

def _client_addrs(words: np.ndarray) -> pa.Array:
    octets = _word_bytes(words)
    parts = [pa.array(np.ascontiguousarray(octets[:, i])).cast(pa.string()) for i in range(4)]
    return pc.binary_join_element_wise(*parts, ".")

def _user_agents(len_words: np.ndarray, char_words: np.ndarray) -> pa.Array:
    lengths = _bounded(len_words, *UA_LEN)
    letters = _bounded(char_words, 0, 26).astype(np.uint8) + _LETTER_A
    keep = np.arange(_UA_MAX_CHARS) < lengths[:, None]
    data = np.ascontiguousarray(letters[keep])
    offsets = np.zeros(len(lengths) + 1, dtype=np.int32)
    offsets[1:] = np.cumsum(lengths)
    return pa.StringArray.from_buffers(len(lengths), pa.py_buffer(offsets), pa.py_buffer(data))

def _optional_int32(present_words: np.ndarray, value_words: np.ndarray) -> pa.Array:
    present = present_words < _PRESENT_CUTOFF
    values = value_words.astype(np.uint32).view(np.int32)
    return pa.array(values, type=pa.int32(), mask=~present)

def row_values(block: np.ndarray, service: str) -> Dict[str, pa.Array]:
    """Per-row random columns decoded from a draw block."""
    n = block.shape[0]
    return {
        "client_addr": _client_addrs(block[:, _ADDR]),
        "request_duration_ns": pa.array(block[:, _DURATION].astype(np.uint32).view(np.int32), type=pa.int32()),
        "request_user_agent": _user_agents(block[:, _UA_LEN], block[:, _UA_CHARS]),
        "request_method": _METHOD_VALUES.take(pa.array(_bounded(block[:, _METHOD], 0, len(METHODS)))),
        "request_host": pa.repeat(request_host(service), n),
        "request_bytes": _optional_int32(block[:, _REQ_PRESENT], block[:, _REQ_VALUE]),
        "response_bytes": _optional_int32(block[:, _RESP_PRESENT], block[:, _RESP_VALUE]),
        "response_status": pa.array(_STATUS_VALUES[_bounded(block[:, _STATUS], 0, len(STATUSES))], type=pa.uint16()),
    }

def synthesize_rows(rng: np.random.Generator, builder: BatchBuilder, ctx: RowContext, count: int) -> None:
    """Append `count` rows for one container, timestamps 0, 1024, 2048, ..."""
    block = draw_row_words(rng, count)
    times = np.arange(count, dtype=np.int64) * TIME_STEP_US
    builder.append_rows(ctx, times, row_values(block, ctx.service))


# ----------------------------
# Hierarchy
# ----------------------------

def append_service(rng: np.random.Generator, builder: BatchBuilder, host: str, service: str) -> None:
    """Pods -> containers -> rows for one service on one host."""
    num_pods = sample_int(rng, *POD_COUNT)
    pods = generate_sorted_strings(rng, num_pods, *POD_NAME_LEN)
    for pod in pods:
        for container_idx in range(sample_int(rng, *CONTAINER_COUNT)):
            container = container_name(service, container_idx)
            ctx = RowContext(
                service=service,
                host=host,
                pod=pod,
                container=container,
                image=image_name(container),
            )
            synthesize_rows(rng, builder, ctx, sample_int(rng, *ROWS_PER_CONTAINER))


class HostSequencer:
    """
    Endless iterator of per-host record batches.

    Every step formats the next host id, flips a coin per service, builds the
    included services and returns the finished batch. The sequence cannot be
    rewound; build a new sequencer to start over from the seed.
    """

    def __init__(
        self,
        seed: bytes = DEFAULT_SEED,
        services: Sequence[str] = SERVICES,
        schema: pa.Schema = ACCESS_LOG_SCHEMA,
    ) -> None:
        self.schema = schema
        self.services = tuple(services)
        self.rng = make_rng(seed)
        self.host_idx = 0

    def __iter__(self) -> Iterator[pa.RecordBatch]:
        return self

    def __next__(self) -> pa.RecordBatch:
        return self.next_batch()

    def next_batch(self) -> pa.RecordBatch:
        builder = BatchBuilder(self.schema)

        host = format_host_id(self.host_idx)
        self.host_idx += 1

        for service in self.services:
            if self.rng.random() < SERVICE_SKIP_PROBABILITY:
                continue
            append_service(self.rng, builder, host, service)
        return builder.finish()

    def take(self, n: int) -> List[pa.RecordBatch]:
        return list(islice(self, n))
