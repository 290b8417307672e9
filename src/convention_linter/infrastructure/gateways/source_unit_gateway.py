"""Source unit gateway: discover and decode JSON / YAML declaration documents."""

import json
import logging
from collections.abc import Mapping
from pathlib import Path

import yaml

from convention_linter.domain.constants import SOURCE_UNIT_SUFFIXES
from convention_linter.domain.errors import ParseError
from convention_linter.domain.protocols import SourceUnitGatewayProtocol

logger = logging.getLogger(__name__)


class SourceUnitGateway(SourceUnitGatewayProtocol):
    """
    Reads source units from disk.

    A document holds one unit mapping or a list of them. A unit without a
    'file' key is attributed to the document it came from.
    """

    def discover(self, paths: list[str], exclude: tuple[str, ...] = ()) -> list[str]:
        found: set[str] = set()
        for raw in paths:
            path = Path(raw)
            if path.is_dir():
                for suffix in SOURCE_UNIT_SUFFIXES:
                    for candidate in path.rglob(f"*{suffix}"):
                        if candidate.is_file():
                            found.add(candidate.as_posix())
            elif path.is_file():
                found.add(path.as_posix())
            else:
                raise ParseError("path does not exist", file=str(raw))
        kept = sorted(f for f in found if not any(fragment in f for fragment in exclude))
        logger.debug("Discovered %d source unit file(s)", len(kept))
        return kept

    def load(self, file_path: str) -> list[Mapping[str, object]]:
        path = Path(file_path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ParseError(f"cannot read file: {exc}", file=file_path) from exc

        try:
            if path.suffix == ".json":
                document = json.loads(text)
            else:
                document = yaml.safe_load(text)
        except json.JSONDecodeError as exc:
            raise ParseError(f"invalid JSON: {exc.msg} (line {exc.lineno})", file=file_path) from exc
        except yaml.YAMLError as exc:
            raise ParseError(f"invalid YAML: {exc}", file=file_path) from exc

        if document is None:
            return []
        units = document if isinstance(document, list) else [document]
        loaded: list[Mapping[str, object]] = []
        for index, unit in enumerate(units):
            if not isinstance(unit, Mapping):
                raise ParseError(
                    f"source unit must be a mapping, got {type(unit).__name__}",
                    file=file_path,
                    path=f"units[{index}]",
                )
            if "file" not in unit:
                unit = {**unit, "file": file_path}
            loaded.append(unit)
        return loaded

    def load_all(self, paths: list[str], exclude: tuple[str, ...] = ()) -> list[Mapping[str, object]]:
        """Discover then load every document under paths, in sorted file order."""
        units: list[Mapping[str, object]] = []
        for file_path in self.discover(paths, exclude):
            units.extend(self.load(file_path))
        return units
