"""Plugin manifest loading."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from slashdeck.core.definition import Kind, ManifestEntry
from slashdeck.core.exceptions import DuplicateIdentifierError, InvalidManifestError

logger = logging.getLogger(__name__)

# plugin.json style: {"commands": ["./commands/lint.md"], "agents": [...]}
_PATH_LIST_KEYS = {"commands": Kind.COMMAND, "agents": Kind.AGENT}


class Manifest(BaseModel):
    """Declared plugin contents."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    version: str | None = None
    description: str | None = None
    entries: tuple[ManifestEntry, ...] = ()

    def keys(self) -> set[tuple[Kind, str]]:
        return {entry.key for entry in self.entries}

    def entries_for(self, kind: Kind) -> list[ManifestEntry]:
        return [entry for entry in self.entries if entry.kind is kind]


def load_manifest(path: Path) -> Manifest:
    """
    Load and validate a manifest file (YAML or JSON).

    Args:
        path: Manifest file

    Returns:
        Manifest with one entry per expected definition

    Raises:
        InvalidManifestError: File is missing, unparsable or has a bad shape
        DuplicateIdentifierError: Same kind and identifier listed twice
    """
    if not path.exists():
        raise InvalidManifestError(path, "file not found")

    try:
        raw = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise InvalidManifestError(path, f"not valid YAML/JSON: {e}")

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise InvalidManifestError(path, "top level must be a mapping")

    try:
        manifest = Manifest(
            name=raw.get("name"),
            version=_optional_str(raw.get("version")),
            description=raw.get("description"),
            entries=tuple(_collect_entries(raw)),
        )
    except (ValidationError, TypeError, ValueError) as e:
        raise InvalidManifestError(path, str(e))

    seen: set[tuple[Kind, str]] = set()
    for entry in manifest.entries:
        if entry.key in seen:
            raise DuplicateIdentifierError(entry.kind.value, entry.identifier, path)
        seen.add(entry.key)

    logger.debug(f"Manifest {path} lists {len(manifest.entries)} definitions")
    return manifest


def _collect_entries(raw: dict[str, Any]) -> list[ManifestEntry]:
    entries: list[ManifestEntry] = []

    explicit = raw.get("entries") or []
    if not isinstance(explicit, list):
        raise ValueError("'entries' must be a list")
    for item in explicit:
        if not isinstance(item, dict):
            raise ValueError(f"manifest entry must be a mapping, got: {item!r}")
        entries.append(ManifestEntry.model_validate(item))

    for key, kind in _PATH_LIST_KEYS.items():
        paths = raw.get(key) or []
        if isinstance(paths, str):
            paths = [paths]
        if not isinstance(paths, list):
            raise ValueError(f"'{key}' must be a list of paths")
        for source in paths:
            source_path = Path(str(source))
            entries.append(
                ManifestEntry(kind=kind, identifier=source_path.stem, source=source_path)
            )

    return entries


def _optional_str(value: Any) -> str | None:
    # YAML reads "1.0" as a float
    return None if value is None else str(value)
