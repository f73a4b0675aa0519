"""Configuration dataclasses for the Mauboussin analysis toolkit.

Each config is a plain ``dataclass`` with a ``validate()`` method that raises
``ValueError`` on invalid combinations, plus ``to_dict`` / ``from_dict`` for
loading from JSON or YAML files.

Configs are **frozen** (``frozen=True``) so a generator or exporter can hold
one without risking silent mutation.
"""

from __future__ import annotations

import datetime
import json
from dataclasses import asdict, dataclass, fields
from typing import Any

import yaml


# ===================================================================== #
#  Report Configuration                                                  #
# ===================================================================== #

@dataclass(frozen=True)
class ReportConfig:
    """Parameters governing the plain-text report layout.

    Attributes
    ----------
    date_format:
        ``strftime`` pattern used on the single ``Generated:`` line.
    placeholder:
        Text rendered for any empty field.
    rule_width:
        Width of the section rule and heading underline.
    """

    date_format: str = "%Y-%m-%d"
    placeholder: str = "Not specified"
    rule_width: int = 59

    def validate(self) -> None:
        """Raise ``ValueError`` if any field has the wrong type or range."""
        for name in ("date_format", "placeholder"):
            if not isinstance(getattr(self, name), str):
                raise ValueError(f"{name} must be a string, got {getattr(self, name)!r}")
        if isinstance(self.rule_width, bool) or not isinstance(self.rule_width, int):
            raise ValueError(f"rule_width must be an integer, got {self.rule_width!r}")
        if not self.placeholder:
            raise ValueError("placeholder must not be empty")
        if self.rule_width < 1:
            raise ValueError(f"rule_width must be >= 1, got {self.rule_width}")
        if not self.date_format:
            raise ValueError("date_format must not be empty")
        rendered = datetime.date(2000, 1, 2).strftime(self.date_format)
        if "\n" in rendered:
            raise ValueError("date_format must render on a single line")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReportConfig:
        valid_keys = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        cfg = cls(**filtered)
        cfg.validate()
        return cfg


# ===================================================================== #
#  Export Configuration                                                  #
# ===================================================================== #

@dataclass(frozen=True)
class ExportConfig:
    """Where and how a report is written to disk.

    Attributes
    ----------
    output_dir:
        Directory the report file is written into.
    encoding:
        Text encoding of the written file.
    default_company:
        Stands in for the company name in the filename when it is empty.
    suffix:
        Appended to the company name to form the filename.
    """

    output_dir: str = "."
    encoding: str = "utf-8"
    default_company: str = "company"
    suffix: str = "_mauboussin_analysis.txt"

    def validate(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, str):
                raise ValueError(f"{f.name} must be a string, got {value!r}")
        if not self.output_dir:
            raise ValueError("output_dir must not be empty")
        if not self.default_company:
            raise ValueError("default_company must not be empty")
        if not self.suffix:
            raise ValueError("suffix must not be empty")
        try:
            "".encode(self.encoding)
        except LookupError:
            raise ValueError(f"unknown encoding {self.encoding!r}") from None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExportConfig:
        valid_keys = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        cfg = cls(**filtered)
        cfg.validate()
        return cfg


# ===================================================================== #
#  Unified config loader                                                 #
# ===================================================================== #

_CONFIG_MAP: dict[str, type] = {
    "report": ReportConfig,
    "export": ExportConfig,
}


def _load_sections(raw: Any) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise ValueError("Top-level config must be a mapping")
    result: dict[str, Any] = {}
    for section, data in raw.items():
        cls = _CONFIG_MAP.get(section)
        if cls is None:
            result[section] = data
        elif data is None or isinstance(data, dict):
            result[section] = cls.from_dict(data or {})
        else:
            raise ValueError(f"Config section {section!r} must be a mapping")
    return result


def load_config_from_json(json_str: str) -> dict[str, Any]:
    """Parse a JSON string into a dict of typed config objects.

    The JSON is expected to be an object whose top-level keys correspond to
    config section names (``report``, ``export``).  Unknown sections are
    preserved as raw values.
    """
    return _load_sections(json.loads(json_str))


def load_config_from_yaml(yaml_str: str) -> dict[str, Any]:
    """YAML counterpart of :func:`load_config_from_json`."""
    return _load_sections(yaml.safe_load(yaml_str))
