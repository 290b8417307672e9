from typing import TYPE_CHECKING, Any, cast

from convention_linter.domain.config import ConfigurationLoader
from convention_linter.domain.registry import RuleRegistry
from convention_linter.domain.rules.catalog import BuiltinRules
from convention_linter.infrastructure.config_file_loader import ConfigFileLoader
from convention_linter.infrastructure.gateways.source_unit_gateway import SourceUnitGateway
from convention_linter.infrastructure.services.guidance_service import GuidanceService
from convention_linter.interface.telemetry import ProjectTelemetry

if TYPE_CHECKING:
    from convention_linter.domain.protocols import (
        GuidanceServiceProtocol,
        SourceUnitGatewayProtocol,
        TelemetryPort,
    )


class ConventionContainer:
    """Dependency Injection Container for the Convention Linter."""

    def __init__(self, config_loader: ConfigurationLoader | None = None) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults(config_loader)

    def _register_defaults(self, config_loader: ConfigurationLoader | None) -> None:
        """Register default implementations for protocols."""
        if config_loader is None:
            config_loader = ConfigurationLoader(ConfigFileLoader.load_config_from_fs())
        self.register_singleton("ConfigurationLoader", config_loader)
        self.register_singleton(
            "TelemetryPort",
            ProjectTelemetry("CONVENTION", "cyan", "Convention scan online"),
        )
        self.register_singleton("SourceUnitGateway", SourceUnitGateway())
        self.register_singleton("GuidanceService", GuidanceService())

    def register_singleton(self, key: str, instance: object) -> None:
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        if key not in self._singletons:
            raise KeyError(f"No registration for '{key}'")
        return self._singletons[key]

    def get_config_loader(self) -> ConfigurationLoader:
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    def get_telemetry_port(self) -> "TelemetryPort":
        return cast("TelemetryPort", self.get("TelemetryPort"))

    def get_source_gateway(self) -> "SourceUnitGatewayProtocol":
        return cast("SourceUnitGatewayProtocol", self.get("SourceUnitGateway"))

    def get_guidance_service(self) -> "GuidanceServiceProtocol":
        return cast("GuidanceServiceProtocol", self.get("GuidanceService"))

    def build_registry(self, config_loader: ConfigurationLoader | None = None) -> RuleRegistry:
        """Built-in rules configured by config_loader (default: the registered one), frozen."""
        config = config_loader or self.get_config_loader()
        return RuleRegistry.configured(
            BuiltinRules.all(),
            disabled=config.disabled_rules,
            severity_overrides=config.severity_overrides,
        )
