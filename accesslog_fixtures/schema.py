"""Fixed access-log schema and the value sets rows are drawn from."""

from __future__ import annotations

import pyarrow as pa


SERVICES = ("frontend", "backend", "database", "cache")
METHODS = ("GET", "PUT", "POST", "HEAD", "PATCH", "DELETE")
STATUSES = (200, 204, 400, 403, 503)

IMAGE_DIGEST = "sha256:30375999bf03beec2187843017b10c9e88d8b1a91615df4eb6350fb39472edd9"

ACCESS_LOG_SCHEMA = pa.schema([
    pa.field("service", pa.string(), nullable=True),
    pa.field("host", pa.string(), nullable=False),
    pa.field("pod", pa.string(), nullable=False),
    pa.field("container", pa.string(), nullable=False),
    pa.field("image", pa.string(), nullable=False),
    pa.field("time", pa.timestamp("us"), nullable=False),
    pa.field("client_addr", pa.string(), nullable=True),
    pa.field("request_duration_ns", pa.int32(), nullable=False),
    pa.field("request_user_agent", pa.string(), nullable=True),
    pa.field("request_method", pa.string(), nullable=True),
    pa.field("request_host", pa.string(), nullable=True),
    pa.field("request_bytes", pa.int32(), nullable=True),
    pa.field("response_bytes", pa.int32(), nullable=True),
    pa.field("response_status", pa.uint16(), nullable=False),
])

# Columns filled from the row context rather than drawn per row
STRUCTURAL_FIELDS = ("service", "host", "pod", "container", "image", "time")


def container_name(service: str, idx: int) -> str:
    return f"{service}_container_{idx}"


def image_name(container: str) -> str:
    return f"{container}@{IMAGE_DIGEST}"


def request_host(service: str) -> str:
    return f"https://{service}.mydomain.com"
