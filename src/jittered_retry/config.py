from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .durations import Duration, coerce_duration
from .retry import Retrier


@dataclass(frozen=True)
class RetrierConfig:
    initial: Union[Duration, str] = "1s"
    max: Union[Duration, str] = "30s"

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "RetrierConfig":
        if isinstance(d.get("retry"), dict):
            d = d["retry"]
        return RetrierConfig(
            initial=d.get("initial", "1s"),
            max=d.get("max", "30s"),
        )

    def to_retrier(self, rng: Optional[Any] = None) -> Retrier:
        return Retrier(coerce_duration(self.initial), coerce_duration(self.max), rng=rng)


def load_retrier_config(path: Path) -> RetrierConfig:
    data = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".yaml", ".yml"}:
        raw = yaml.safe_load(data) or {}
    else:
        raw = json.loads(data)
    return RetrierConfig.from_dict(raw)


def retrier_from_dict(d: dict[str, Any], rng: Optional[Any] = None) -> Retrier:
    return RetrierConfig.from_dict(d).to_retrier(rng=rng)
