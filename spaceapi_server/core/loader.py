from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Tuple

from pydantic import ValidationError

from ..domain.errors import ConfigurationError
from ..domain.models import StatusDocument
from ..domain.modifiers import MODIFIER_NAMES, StatusModifier
from ..domain.registry import SensorRegistry, SensorSpec
from ..sensors.templates import TEMPLATE_KINDS

logger = logging.getLogger(__name__)

DEFAULT_STATUS_PATH = Path(__file__).resolve().parent.parent / "config" / "default_status.json"


@dataclass(frozen=True)
class StatusConfig:
    status: StatusDocument
    registry: SensorRegistry
    modifiers: Tuple[StatusModifier, ...]


def _build_sensor(entry: Any) -> SensorSpec:
    if not isinstance(entry, dict):
        raise ConfigurationError(f"Sensor entry must be an object, got {entry!r}")
    fields = dict(entry)
    kind = fields.pop("kind", None)
    data_key = fields.pop("data_key", None)
    if not data_key:
        raise ConfigurationError(f"Sensor entry without data_key: {entry!r}")

    template_cls = TEMPLATE_KINDS.get(kind)
    if template_cls is None:
        raise ConfigurationError(
            f"Unknown sensor kind {kind!r} for '{data_key}' (known: {', '.join(sorted(TEMPLATE_KINDS))})"
        )
    try:
        template = template_cls(**fields)
    except (TypeError, ValidationError) as e:
        raise ConfigurationError(f"Invalid {kind} sensor '{data_key}': {e}") from e
    return SensorSpec(template=template, data_key=data_key)


def _build_modifier(name: Any) -> StatusModifier:
    modifier_cls = MODIFIER_NAMES.get(name)
    if modifier_cls is None:
        raise ConfigurationError(
            f"Unknown status modifier {name!r} (known: {', '.join(sorted(MODIFIER_NAMES))})"
        )
    return modifier_cls()


def parse_status_config(data: Any) -> StatusConfig:
    if not isinstance(data, dict) or "status" not in data:
        raise ConfigurationError("Status config must be an object with a 'status' key")

    try:
        status = StatusDocument.model_validate(data["status"])
    except ValidationError as e:
        raise ConfigurationError(f"Invalid status document: {e}") from e
    if status.sensors is not None:
        raise ConfigurationError("Static status document must not contain 'sensors'")

    sensors: List[SensorSpec] = [_build_sensor(s) for s in data.get("sensors") or []]
    modifiers = tuple(_build_modifier(m) for m in data.get("modifiers") or [])
    return StatusConfig(status=status, registry=SensorRegistry(sensors), modifiers=modifiers)


def load_status_config(path: Optional[str | Path] = None) -> StatusConfig:
    """Read the static document, sensor list and modifier names from a JSON file."""
    p = Path(path) if path else DEFAULT_STATUS_PATH
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read status config {p}: {e}") from e

    cfg = parse_status_config(data)
    logger.info(
        "Loaded status config %s (space=%s sensors=%d modifiers=%d)",
        p, cfg.status.space, len(cfg.registry), len(cfg.modifiers),
    )
    return cfg
