from collections.abc import Mapping
from typing import TYPE_CHECKING, Protocol

from convention_linter.domain.registry_types import RuleGuidanceEntry

if TYPE_CHECKING:
    from convention_linter.domain.report import Report


class TelemetryPort(Protocol):
    """Protocol for telemetry/UI updates."""

    def step(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def debug(self, message: str) -> None: ...
    def handshake(self) -> None: ...


class SourceUnitGatewayProtocol(Protocol):
    """Protocol for discovering and decoding source unit documents."""

    def discover(self, paths: list[str], exclude: tuple[str, ...] = ()) -> list[str]:
        """Return unit files under paths (files kept as given, directories searched recursively), sorted."""
        ...

    def load(self, file_path: str) -> list[Mapping[str, object]]:
        """Decode one file into source unit mappings. Raises ParseError on malformed content."""
        ...

    def load_all(self, paths: list[str], exclude: tuple[str, ...] = ()) -> list[Mapping[str, object]]:
        """Discover then load every document under paths, in sorted file order."""
        ...


class ReportRendererProtocol(Protocol):
    """Protocol for turning a Report into renderable output."""

    def format(self, report: "Report") -> str:
        """Render report deterministically: the same report always gives identical output."""
        ...


class GuidanceServiceProtocol(Protocol):
    """Protocol for rule guidance (rationale, examples, manual fix). Implemented by GuidanceService in infrastructure."""

    def get_entry(self, rule_id: str) -> RuleGuidanceEntry | None:
        """Return the full guidance entry for the rule, or None."""
        ...

    def get_manual_instructions(self, rule_id: str) -> str:
        """Return manual fix instructions for the rule (falls back to the _default entry)."""
        ...

    def known_rule_ids(self) -> list[str]:
        """Rule ids that have a guidance entry."""
        ...
