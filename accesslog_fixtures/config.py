"""YAML configuration for a fixture run (host count, seed, output settings)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from accesslog_fixtures.generator import DEFAULT_SEED
from accesslog_fixtures.writer import STATS_VARIANTS, StatsVariant, variant_for


DEFAULT_HOSTS = 40


@dataclass
class FixtureConfig:
    hosts: int = DEFAULT_HOSTS
    seed: bytes = DEFAULT_SEED
    output_dir: Path = Path(".")
    compression: str = "none"
    variants: Tuple[StatsVariant, ...] = field(default_factory=lambda: STATS_VARIANTS)


def _parse_seed(raw: Any) -> bytes:
    if not isinstance(raw, list) or len(raw) != len(DEFAULT_SEED):
        raise ValueError(f"generation.seed must be a list of {len(DEFAULT_SEED)} byte values")
    if not all(isinstance(b, int) and 0 <= b <= 255 for b in raw):
        raise ValueError("generation.seed values must be integers in 0..255")
    return bytes(raw)


def config_from_dict(cfg: Dict[str, Any]) -> FixtureConfig:
    gen = cfg.get("generation") or {}
    out = cfg.get("output") or {}
    conf = FixtureConfig()

    if "hosts" in gen:
        hosts = int(gen["hosts"])
        if hosts <= 0:
            raise ValueError(f"generation.hosts must be positive, got {hosts}")
        conf.hosts = hosts
    if "seed" in gen:
        conf.seed = _parse_seed(gen["seed"])

    if "dir" in out:
        conf.output_dir = Path(out["dir"])
    if "compression" in out:
        conf.compression = str(out["compression"])
    if "variants" in out:
        names: List[str] = list(out["variants"] or [])
        if not names:
            raise ValueError("output.variants must name at least one statistics variant")
        conf.variants = tuple(variant_for(n) for n in names)

    return conf


def load_config(path: Optional[str] = None) -> FixtureConfig:
    """Load YAML configuration; None gives the built-in defaults."""
    if path is None:
        return FixtureConfig()
    cfg_path = Path(path)
    if not cfg_path.exists():
        raise FileNotFoundError(f"config file does not exist: {cfg_path}")
    cfg = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    return config_from_dict(cfg)
