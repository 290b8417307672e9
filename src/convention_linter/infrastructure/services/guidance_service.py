"""GuidanceService: loads the rule guidance registry and provides rationale and manual instructions."""

from pathlib import Path
from typing import cast

import yaml

from convention_linter.domain.protocols import GuidanceServiceProtocol
from convention_linter.domain.registry_types import RuleGuidanceEntry

_DEFAULT_KEY = "_default"


class GuidanceService(GuidanceServiceProtocol):
    """Loads rule_guidance.yaml and provides get_entry / get_manual_instructions."""

    def __init__(self, registry_path: str | None = None) -> None:
        if registry_path is not None:
            self._path = Path(registry_path)
        else:
            # Default: packaged resource next to this package
            _base = Path(__file__).resolve().parent.parent.parent
            self._path = _base / "resources" / "rule_guidance.yaml"
        self._registry: dict[str, RuleGuidanceEntry] = {}
        self._load()

    def _load(self) -> None:
        if self._path.exists():
            with open(self._path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
                self._registry = (
                    cast(dict[str, RuleGuidanceEntry], data) if isinstance(data, dict) else {}
                )
        else:
            self._registry = {}

    def get_registry(self) -> dict[str, RuleGuidanceEntry]:
        """Return a shallow copy of the loaded registry."""
        return dict(self._registry)

    def get_entry(self, rule_id: str) -> RuleGuidanceEntry | None:
        if rule_id == _DEFAULT_KEY:
            return None
        entry = self._registry.get(rule_id)
        if isinstance(entry, dict):
            return cast(RuleGuidanceEntry, dict(entry))
        return None

    def get_manual_instructions(self, rule_id: str) -> str:
        entry = self.get_entry(rule_id)
        if entry and entry.get("manual_instructions"):
            return str(entry["manual_instructions"]).strip()
        default_entry = self._registry.get(_DEFAULT_KEY)
        if default_entry and default_entry.get("manual_instructions"):
            return str(default_entry["manual_instructions"]).strip()
        return "No guidance available."

    def known_rule_ids(self) -> list[str]:
        return sorted(k for k in self._registry if k != _DEFAULT_KEY)
