from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import os
from pathlib import Path
import tomllib
from typing import cast
import warnings

from .constants import Defaults


@dataclass(frozen=True, slots=True)
class ImporterConfig:
    min_confidence: float = Defaults.MIN_CONFIDENCE
    overflow_confidence: float = Defaults.OVERFLOW_CONFIDENCE
    overflow_min_length: int = Defaults.OVERFLOW_MIN_LENGTH
    overflow_max_length: int = Defaults.OVERFLOW_MAX_LENGTH
    classifier_threshold: float = Defaults.CLASSIFIER_THRESHOLD
    batch_size: int = Defaults.BATCH_SIZE
    sample_size: int = Defaults.SAMPLE_SIZE
    inference_rows: int = Defaults.INFERENCE_ROWS
    default_table: str = Defaults.DEFAULT_TABLE
    exclusive_sources: bool = False

    def __post_init__(self) -> None:
        for name in ("min_confidence", "overflow_confidence", "classifier_threshold"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0.0 and 1.0, got {value}")
        if self.overflow_min_length < 0:
            raise ValueError(
                f"overflow_min_length must be non-negative, got {self.overflow_min_length}"
            )
        for name in ("overflow_max_length", "batch_size", "sample_size", "inference_rows"):
            value = getattr(self, name)
            if value < 1:
                raise ValueError(f"{name} must be positive, got {value}")
        if not self.default_table.strip():
            raise ValueError("default_table must not be empty")

    @classmethod
    def from_env(cls) -> ImporterConfig:
        return cls(
            min_confidence=float(
                os.getenv("MIN_CONFIDENCE", str(Defaults.MIN_CONFIDENCE))
            ),
            batch_size=int(os.getenv("BATCH_SIZE", str(Defaults.BATCH_SIZE))),
            sample_size=int(os.getenv("SAMPLE_SIZE", str(Defaults.SAMPLE_SIZE))),
            inference_rows=int(
                os.getenv("INFERENCE_ROWS", str(Defaults.INFERENCE_ROWS))
            ),
            default_table=os.getenv("DEFAULT_TABLE", Defaults.DEFAULT_TABLE),
            exclusive_sources=_parse_flag(os.getenv("EXCLUSIVE_SOURCES", "")),
        )


class ConfigLoader:
    pass

    @staticmethod
    def load(config_file: Path | None = None) -> ImporterConfig:
        config = ImporterConfig.from_env()
        if config_file is None:
            config_file = Path("contact_importer.toml")
        if config_file.exists():
            try:
                config = ConfigLoader._load_from_toml(config_file, config)
            except Exception as e:
                warnings.warn(
                    f"Failed to load config from {config_file}: {e}", stacklevel=2
                )
        return config

    @staticmethod
    def _load_from_toml(
        config_file: Path, base_config: ImporterConfig
    ) -> ImporterConfig:
        with config_file.open("rb") as handle:
            data = tomllib.load(handle)
        mapping = _get_table(data, "mapping")
        transfer = _get_table(data, "transfer")
        inference = _get_table(data, "inference")

        min_confidence = base_config.min_confidence
        if (value := mapping.get("min_confidence")) is not None:
            min_confidence = _coerce_float(value, key="mapping.min_confidence")
        overflow_confidence = base_config.overflow_confidence
        if (value := mapping.get("overflow_confidence")) is not None:
            overflow_confidence = _coerce_float(
                value, key="mapping.overflow_confidence"
            )
        overflow_min_length = base_config.overflow_min_length
        if (value := mapping.get("overflow_min_length")) is not None:
            overflow_min_length = _coerce_int(value, key="mapping.overflow_min_length")
        overflow_max_length = base_config.overflow_max_length
        if (value := mapping.get("overflow_max_length")) is not None:
            overflow_max_length = _coerce_int(value, key="mapping.overflow_max_length")
        classifier_threshold = base_config.classifier_threshold
        if (value := mapping.get("classifier_threshold")) is not None:
            classifier_threshold = _coerce_float(
                value, key="mapping.classifier_threshold"
            )
        exclusive_sources = base_config.exclusive_sources
        if (value := mapping.get("exclusive_sources")) is not None:
            exclusive_sources = _coerce_bool(value, key="mapping.exclusive_sources")

        batch_size = base_config.batch_size
        if (value := transfer.get("batch_size")) is not None:
            batch_size = _coerce_int(value, key="transfer.batch_size")
        default_table = base_config.default_table
        if (value := transfer.get("default_table")) is not None:
            default_table = str(value).strip()

        sample_size = base_config.sample_size
        if (value := inference.get("sample_size")) is not None:
            sample_size = _coerce_int(value, key="inference.sample_size")
        inference_rows = base_config.inference_rows
        if (value := inference.get("inference_rows")) is not None:
            inference_rows = _coerce_int(value, key="inference.inference_rows")

        return ImporterConfig(
            min_confidence=min_confidence,
            overflow_confidence=overflow_confidence,
            overflow_min_length=overflow_min_length,
            overflow_max_length=overflow_max_length,
            classifier_threshold=classifier_threshold,
            batch_size=batch_size,
            sample_size=sample_size,
            inference_rows=inference_rows,
            default_table=default_table,
            exclusive_sources=exclusive_sources,
        )


def _get_table(data: Mapping[str, object], key: str) -> Mapping[str, object]:
    value = data.get(key)
    if isinstance(value, Mapping):
        return cast("Mapping[str, object]", value)
    return {}


def _parse_flag(raw: str) -> bool:
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _coerce_float(value: object, *, key: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be numeric, got bool")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        return float(value)
    raise ValueError(f"{key} must be numeric or string, got {type(value).__name__}")


def _coerce_int(value: object, *, key: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be an int, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        return int(value)
    raise ValueError(f"{key} must be int-like or string, got {type(value).__name__}")


def _coerce_bool(value: object, *, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return _parse_flag(value)
    raise ValueError(f"{key} must be a bool or string, got {type(value).__name__}")
