"""
Lint Configuration
Rule options and severity, loadable from ESLint-style JSON files.

Accepted file shapes::

    {"rules": {"valid-jsdoc": [2, {"requireReturn": false}]}}
    {"rules": {"valid-jsdoc": "warn"}}
    {"requireReturn": false, "prefer": {"returns": "return"}}
"""

import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from jsdoclint.errors import ConfigError
from jsdoclint.reporting.diagnostics import Severity

logger = logging.getLogger(__name__)

RULE_NAME = "valid-jsdoc"

_SEVERITY_NAMES = {
    "off": Severity.OFF,
    "warn": Severity.WARN,
    "warning": Severity.WARN,
    "error": Severity.ERROR,
}


def parse_severity(value: Union[int, str]) -> Severity:
    """Convert ``0|1|2`` or ``off|warn|error`` to a Severity."""
    if isinstance(value, bool):
        raise ConfigError(f"Invalid severity: {value!r}")
    if isinstance(value, int):
        try:
            return Severity(value)
        except ValueError:
            raise ConfigError(f"Invalid severity: {value!r}") from None
    if isinstance(value, str) and value.lower() in _SEVERITY_NAMES:
        return _SEVERITY_NAMES[value.lower()]
    raise ConfigError(f"Invalid severity: {value!r}")


@dataclass(frozen=True)
class ValidJSDocOptions:
    """Options of the valid-jsdoc rule. Immutable for the duration of a run."""

    require_return: bool = True
    require_param_description: bool = True
    prefer: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'prefer', MappingProxyType(dict(self.prefer)))

    _KEYS = {
        "requireReturn": "require_return",
        "requireParamDescription": "require_param_description",
        "prefer": "prefer",
    }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ValidJSDocOptions":
        """Build options from ESLint-style camelCase keys."""
        if not isinstance(data, Mapping):
            raise ConfigError(f"valid-jsdoc options must be an object, got {type(data).__name__}")
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            if key not in cls._KEYS:
                raise ConfigError(f"Unknown valid-jsdoc option: {key!r}")
            if key == "prefer":
                if not isinstance(value, Mapping) or not all(
                    isinstance(k, str) and isinstance(v, str) for k, v in value.items()
                ):
                    raise ConfigError("'prefer' must map tag titles to tag titles")
            elif not isinstance(value, bool):
                raise ConfigError(f"{key!r} must be true or false")
            kwargs[cls._KEYS[key]] = value
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "requireReturn": self.require_return,
            "requireParamDescription": self.require_param_description,
            "prefer": dict(self.prefer),
        }

    def merged(self, **overrides) -> "ValidJSDocOptions":
        """Copy with the given non-None fields replaced."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "prefer" in changes:
            changes["prefer"] = {**self.prefer, **changes["prefer"]}
        return replace(self, **changes)


@dataclass(frozen=True)
class LintConfig:
    """Rule options plus the severity diagnostics are reported with."""

    options: ValidJSDocOptions = field(default_factory=ValidJSDocOptions)
    severity: Severity = Severity.ERROR

    @property
    def enabled(self) -> bool:
        return self.severity is not Severity.OFF

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LintConfig":
        if not isinstance(data, Mapping):
            raise ConfigError("Configuration must be a JSON object")
        if "rules" not in data:
            return cls(options=ValidJSDocOptions.from_dict(data))

        rules = data["rules"]
        if not isinstance(rules, Mapping):
            raise ConfigError("'rules' must be an object")
        if RULE_NAME not in rules:
            return cls()

        entry = rules[RULE_NAME]
        if isinstance(entry, list):
            if not entry or len(entry) > 2:
                raise ConfigError(f"'{RULE_NAME}' must be [severity] or [severity, options]")
            severity = parse_severity(entry[0])
            options = ValidJSDocOptions.from_dict(entry[1]) if len(entry) == 2 else ValidJSDocOptions()
        else:
            severity = parse_severity(entry)
            options = ValidJSDocOptions()
        return cls(options=options, severity=severity)


def load_config(path: Union[str, Path]) -> LintConfig:
    """Read a JSON configuration file.

    Raises:
        ConfigError: if the file cannot be read or is not a valid configuration.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding='utf-8')
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    logger.debug("Loaded configuration from %s", path)
    return LintConfig.from_dict(data)


def resolve_options(options: Optional[Union[ValidJSDocOptions, Mapping[str, Any]]]) -> ValidJSDocOptions:
    """Accept options as an object, an ESLint-style dict, or None."""
    if options is None:
        return ValidJSDocOptions()
    if isinstance(options, ValidJSDocOptions):
        return options
    return ValidJSDocOptions.from_dict(options)
