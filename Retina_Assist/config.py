from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from detect_kit.decode import DecoderConfig
from detect_kit.nms import ResolverConfig
from detect_kit.postprocess import PostprocessConfig

from .depth import DepthZoneConfig
from .narration import RUPEE_CLASS_VALUES
from .navigation import NavigationConfig
from .session import AnnouncementConfig


@dataclass(frozen=True)
class AssistProfile:
    schema_version: int = 1
    depth: DepthZoneConfig = field(default_factory=DepthZoneConfig)
    navigation: NavigationConfig = field(default_factory=NavigationConfig)
    announcement: AnnouncementConfig = field(default_factory=AnnouncementConfig)
    postprocess: PostprocessConfig = field(default_factory=PostprocessConfig)
    class_names: Dict[int, str] = field(default_factory=dict)
    class_values: Tuple[int, ...] = RUPEE_CLASS_VALUES
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        if self.schema_version != 1:
            raise ValueError("assist profile schema_version must be 1")


_SECTION_KEYS = {
    "depth": {
        "band_start",
        "band_end",
        "stride",
        "min_valid_mm",
        "max_valid_mm",
        "left_fraction",
        "center_fraction",
    },
    "navigation": {"stop_threshold_mm", "warn_threshold_mm"},
    "announcement": {"cooldown_s"},
    "decoder": {
        "input_size",
        "default_threshold",
        "class_thresholds",
        "threshold_inclusive",
        "max_box_fraction",
        "normalized_probe_limit",
        "normalized_probe_anchors",
    },
    "resolver": {"duplicate_iou", "conflict_iou", "max_detections"},
}
_INT_KEYS = {"stride", "min_valid_mm", "max_valid_mm", "stop_threshold_mm", "warn_threshold_mm", "input_size", "normalized_probe_anchors", "max_detections"}
_BOOL_KEYS = {"threshold_inclusive"}


def _require_number(payload: Dict[str, Any], key: str) -> float:
    value = payload[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{key} must be a number")
    return float(value)


def _require_int(payload: Dict[str, Any], key: str) -> int:
    value = payload[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer")
    return int(value)


def _parse_class_id(raw: str, key: str) -> int:
    text = str(raw).strip()
    if not text.isdigit():
        raise ValueError(f"{key} keys must be class ids (got {raw!r})")
    return int(text)


def _section(payload: Dict[str, Any], name: str) -> Dict[str, Any]:
    raw = payload.get(name)
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"{name} must be a JSON object")

    unknown = sorted(set(raw.keys()) - _SECTION_KEYS[name])
    if unknown:
        raise ValueError(f"Unknown {name} keys: {unknown}")

    kwargs: Dict[str, Any] = {}
    for key, value in raw.items():
        if value is None and key == "max_detections":
            kwargs[key] = None
        elif key == "class_thresholds":
            if not isinstance(value, dict):
                raise ValueError("class_thresholds must be a JSON object")
            kwargs[key] = {_parse_class_id(k, key): _require_number(value, k) for k in value}
        elif key in _BOOL_KEYS:
            if not isinstance(value, bool):
                raise ValueError(f"{key} must be true or false")
            kwargs[key] = value
        elif key in _INT_KEYS:
            kwargs[key] = _require_int(raw, key)
        else:
            kwargs[key] = _require_number(raw, key)
    return kwargs


def _parse_class_names(payload: Dict[str, Any]) -> Dict[int, str]:
    raw = payload.get("class_names", {})
    if not isinstance(raw, dict):
        raise ValueError("class_names must be a JSON object")
    names: Dict[int, str] = {}
    for k, v in raw.items():
        if not isinstance(v, str) or not v.strip():
            raise ValueError(f"class_names[{k}] must be a non-empty string")
        names[_parse_class_id(k, "class_names")] = v.strip()
    return names


def _parse_class_values(payload: Dict[str, Any]) -> Tuple[int, ...]:
    raw = payload.get("class_values")
    if raw is None:
        return RUPEE_CLASS_VALUES
    if not isinstance(raw, list) or not raw:
        raise ValueError("class_values must be a non-empty list of integers")
    if any(isinstance(v, bool) or not isinstance(v, int) for v in raw):
        raise ValueError("class_values must be a non-empty list of integers")
    return tuple(int(v) for v in raw)


def load_assist_profile(path: Path) -> AssistProfile:
    if not path.exists():
        raise FileNotFoundError(f"Assist profile not found: {path}")
    raw = path.read_text(encoding="utf-8")
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid assist profile JSON: {path}") from exc
    if not isinstance(payload, dict):
        raise ValueError("Assist profile must be a JSON object")

    allowed = {
        "schema_version",
        "depth",
        "navigation",
        "announcement",
        "decoder",
        "resolver",
        "class_names",
        "class_values",
        "notes",
    }
    unknown = sorted(set(payload.keys()) - allowed)
    if unknown:
        raise ValueError(f"Unknown assist profile keys: {unknown}")

    if "schema_version" not in payload:
        raise ValueError("Missing required key: schema_version")
    schema_version = _require_int(payload, "schema_version")

    notes = payload.get("notes")
    if notes is not None and not isinstance(notes, str):
        raise ValueError("notes must be a string if provided")

    return AssistProfile(
        schema_version=schema_version,
        depth=DepthZoneConfig(**_section(payload, "depth")),
        navigation=NavigationConfig(**_section(payload, "navigation")),
        announcement=AnnouncementConfig(**_section(payload, "announcement")),
        postprocess=PostprocessConfig(
            decoder=DecoderConfig(**_section(payload, "decoder")),
            resolver=ResolverConfig(**_section(payload, "resolver")),
        ),
        class_names=_parse_class_names(payload),
        class_values=_parse_class_values(payload),
        notes=notes,
    )
