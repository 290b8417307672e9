"""Configuration loader for linter settings. Immutable value object created by Infrastructure."""

from __future__ import annotations

import logging

from convention_linter.domain.rules import Severity

logger = logging.getLogger(__name__)

OUTPUT_FORMATS: tuple[str, ...] = ("text", "json", "table")


class ConfigurationLoader:
    """
    Immutable configuration for linter settings.

    Created by Infrastructure from the [tool.convention-linter] table. Domain does not
    read the filesystem; Infrastructure calls ConfigFileLoader.load_config_from_fs()
    and constructs ConfigurationLoader(config_dict) at composition root.
    Invalid values are logged and replaced by defaults.
    """

    def __init__(self, config_dict: dict[str, object]) -> None:
        """Set config once at construction. No mutable class or instance state after init."""
        self._config = dict(config_dict)
        self._disabled = self._read_disabled()
        self._severity_overrides = self._read_severity_overrides()
        self._workers = self._read_workers()
        self._output_format = self._read_output_format()
        self._exclude = self._read_exclude()

    @property
    def config(self) -> dict[str, object]:
        """Return the loaded configuration."""
        return dict(self._config)

    @property
    def disabled_rules(self) -> tuple[str, ...]:
        """Rule ids listed under `disable`."""
        return self._disabled

    @property
    def severity_overrides(self) -> dict[str, Severity]:
        """Rule id -> Severity from the `severity` table."""
        return dict(self._severity_overrides)

    @property
    def workers(self) -> int:
        """Parallel workers for independent source units (default 1: serial)."""
        return self._workers

    @property
    def output_format(self) -> str:
        return self._output_format

    @property
    def exclude(self) -> tuple[str, ...]:
        """Path fragments skipped while discovering source unit files."""
        return self._exclude

    def with_overrides(
        self,
        *,
        disable: list[str] | None = None,
        workers: int | None = None,
        output_format: str | None = None,
    ) -> ConfigurationLoader:
        """Return a new loader with CLI options layered over the file settings."""
        merged = dict(self._config)
        if disable:
            merged["disable"] = list(self._disabled) + [r for r in disable if r not in self._disabled]
        if workers is not None:
            merged["workers"] = workers
        if output_format is not None:
            merged["format"] = output_format
        return ConfigurationLoader(merged)

    def _read_disabled(self) -> tuple[str, ...]:
        raw = self._config.get("disable", [])
        if not isinstance(raw, list):
            logger.warning("Configuration Warning: 'disable' must be a list of rule ids; ignoring.")
            return ()
        return tuple(dict.fromkeys(str(x) for x in raw if isinstance(x, str)))

    def _read_severity_overrides(self) -> dict[str, Severity]:
        raw = self._config.get("severity", {})
        if not isinstance(raw, dict):
            logger.warning("Configuration Warning: 'severity' must be a table; ignoring.")
            return {}
        overrides: dict[str, Severity] = {}
        for rule_id, value in raw.items():
            if not isinstance(value, str):
                logger.warning("Configuration Warning: severity for '%s' must be a string.", rule_id)
                continue
            try:
                overrides[str(rule_id)] = Severity.parse(value)
            except ValueError as exc:
                logger.warning("Configuration Warning: %s", exc)
        return overrides

    def _read_workers(self) -> int:
        raw = self._config.get("workers", 1)
        if isinstance(raw, bool) or not isinstance(raw, int) or raw < 1:
            logger.warning("Configuration Warning: 'workers' must be a positive integer; using 1.")
            return 1
        return raw

    def _read_output_format(self) -> str:
        raw = self._config.get("format", "text")
        if raw not in OUTPUT_FORMATS:
            logger.warning(
                "Configuration Warning: unknown format %r (expected one of %s); using 'text'.",
                raw,
                ", ".join(OUTPUT_FORMATS),
            )
            return "text"
        return str(raw)

    def _read_exclude(self) -> tuple[str, ...]:
        raw = self._config.get("exclude", [])
        if isinstance(raw, list):
            return tuple(str(x) for x in raw if isinstance(x, str))
        return ()
