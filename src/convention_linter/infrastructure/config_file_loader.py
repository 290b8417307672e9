"""Load [tool.convention-linter] from pyproject.toml. Infrastructure I/O only."""

import logging
import sys
from pathlib import Path

from convention_linter.domain.constants import CONFIG_SECTION

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib

logger = logging.getLogger(__name__)


class ConfigFileLoader:
    """
    Loads config from pyproject.toml. No top-level functions.
    """

    @staticmethod
    def load_config_from_fs(start: Path | None = None) -> dict[str, object]:
        """Walk up from start (default: cwd) to the first pyproject.toml. Returns the section table."""
        current_path = (start or Path.cwd()).resolve()
        for directory in (current_path, *current_path.parents):
            config_file = directory / "pyproject.toml"
            if not config_file.is_file():
                continue
            try:
                with config_file.open("rb") as f:
                    data = toml_lib.load(f)
            except OSError as exc:
                logger.warning("Could not read %s: %s", config_file, exc)
                continue
            except toml_lib.TOMLDecodeError as exc:
                logger.warning("Ignoring malformed %s: %s", config_file, exc)
                return {}
            logger.debug("Loaded configuration from %s", config_file)
            return ConfigFileLoader._section(data, config_file)
        return {}

    @staticmethod
    def _section(data: dict[str, object], config_file: Path) -> dict[str, object]:
        """[tool.convention-linter] as a dict; anything but a table is ignored with a warning."""
        tool_section = data.get("tool", {})
        if not isinstance(tool_section, dict):
            logger.warning("Configuration Warning: [tool] in %s is not a table; ignoring.", config_file)
            return {}
        config_dict = tool_section.get(CONFIG_SECTION, {})
        if not isinstance(config_dict, dict):
            logger.warning(
                "Configuration Warning: tool.%s in %s must be a table, got %s; ignoring.",
                CONFIG_SECTION,
                config_file,
                type(config_dict).__name__,
            )
            return {}
        return dict(config_dict)
