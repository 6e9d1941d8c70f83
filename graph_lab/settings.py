"""User settings, validated where persisted values enter the core."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from . import config
from .curves import normalize_param_value


class _ParsedEnum(str, Enum):
    @classmethod
    def _legacy_values(cls) -> Dict[str, str]:
        return {}

    @classmethod
    def default(cls):
        raise NotImplementedError

    @classmethod
    def parse(cls, raw: Any):
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, str):
            text = raw.strip()
            text = cls._legacy_values().get(text, text)
            for member in cls:
                if text == member.value or text.upper() == member.name:
                    return member
        return cls.default()


class Theme(_ParsedEnum):
    LIGHT = "light"
    DARK = "dark"
    BLACKBOARD = "blackboard"

    @classmethod
    def _legacy_values(cls) -> Dict[str, str]:
        return {"ライト": "light", "ダーク": "dark", "黒板": "blackboard"}

    @classmethod
    def default(cls) -> "Theme":
        return cls.LIGHT


class InputMode(_ParsedEnum):
    DECIMAL = "decimal"
    FRACTION = "fraction"

    @classmethod
    def _legacy_values(cls) -> Dict[str, str]:
        return {"小数": "decimal", "分数": "fraction"}

    @classmethod
    def default(cls) -> "InputMode":
        return cls.DECIMAL


def _parse_bool(raw: Any, default: bool) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        return bool(raw)
    if isinstance(raw, str):
        lowered = raw.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
    return default


def _parse_default_params(raw: Any) -> Dict[str, float]:
    params = dict(config.DEFAULT_PARAMS)
    if not isinstance(raw, Mapping):
        return params
    for key in params:
        if key in raw:
            value = normalize_param_value(key, raw[key])
            if value is not None:
                params[key] = value
    return params


@dataclass
class Settings:
    theme: Theme = Theme.LIGHT
    input_mode: InputMode = InputMode.DECIMAL
    grid_snap_enabled: bool = True
    haptics_enabled: bool = True
    default_params: Dict[str, float] = field(default_factory=lambda: dict(config.DEFAULT_PARAMS))

    @classmethod
    def from_mapping(cls, raw: Optional[Mapping[str, Any]]) -> "Settings":
        data = raw if isinstance(raw, Mapping) else {}
        return cls(
            theme=Theme.parse(data.get("theme")),
            input_mode=InputMode.parse(data.get("input_mode")),
            grid_snap_enabled=_parse_bool(data.get("grid_snap_enabled"), True),
            haptics_enabled=_parse_bool(data.get("haptics_enabled"), True),
            default_params=_parse_default_params(data.get("default_params")),
        )

    def to_mapping(self) -> Dict[str, Any]:
        return {
            "theme": self.theme.value,
            "input_mode": self.input_mode.value,
            "grid_snap_enabled": self.grid_snap_enabled,
            "haptics_enabled": self.haptics_enabled,
            "default_params": dict(self.default_params),
        }
