"""Package entry point - composition root. Wire dependencies and run the CLI app."""

import logging
import os

from convention_linter.domain.constants import LOG_LEVEL_ENV
from convention_linter.infrastructure.di.container import ConventionContainer
from convention_linter.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    container = ConventionContainer()
    deps = CLIDependencies(
        config_loader=container.get_config_loader(),
        telemetry=container.get_telemetry_port(),
        source_gateway=container.get_source_gateway(),
        guidance_service=container.get_guidance_service(),
        registry_factory=container.build_registry,
    )

    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
