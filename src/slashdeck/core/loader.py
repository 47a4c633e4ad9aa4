"""Registry loader: source tree + manifest -> validated Registry."""

import logging
from pathlib import Path
from typing import Any, Callable

import yaml
from pydantic import ValidationError

from slashdeck.core.definition import Definition, Kind
from slashdeck.core.exceptions import (
    DefError,
    IdentifierMismatchError,
    InvalidDefError,
    MissingDefinitionError,
    UnregisteredDefinitionError,
)
from slashdeck.core.manifest import Manifest, load_manifest
from slashdeck.core.registry import Registry
from slashdeck.core.store import DefinitionStore
from slashdeck.core.template import validate_template
from slashdeck.utils.config import Config
from slashdeck.utils.def_loader import find_definition_files, parse_definition

logger = logging.getLogger(__name__)

ParseFn = Callable[[str, dict[str, Any], str], Definition]


class RegistryLoader:
    """Loads command and agent definitions from a plugin directory."""

    @staticmethod
    def from_config(config: Config) -> "RegistryLoader":
        return RegistryLoader(config)

    def __init__(self, config: Config):
        """
        Initialize RegistryLoader.

        Args:
            config: Config object containing root, commands_path, agents_path,
                manifest_path and placeholder
        """
        self.config = config

    def load(self) -> Registry:
        """
        Build a Registry from the plugin directory.

        Nothing is published if any step fails.

        Returns:
            Frozen, fully validated Registry

        Raises:
            InvalidManifestError: Manifest missing or malformed
            InvalidDefError: A source file is malformed
            IdentifierMismatchError: Agent name differs from its file name
            MalformedTemplateError: Placeholder occurs more than once in a body
            DuplicateIdentifierError: Identifier used twice within a kind
            MissingDefinitionError: Manifest entry without a source file
            UnregisteredDefinitionError: Source file not in the manifest
        """
        try:
            manifest = load_manifest(self.config.manifest_path)

            store = DefinitionStore()
            for kind, kind_root in self._kind_roots().items():
                for path in find_definition_files(kind_root):
                    store.put(self.load_file(kind, path, kind_root))

            self._cross_validate(manifest, store)
        except DefError as e:
            logger.error(f"Failed to load {self.config.root}: {e}")
            raise

        store.freeze()
        registry = Registry(store, manifest)
        logger.info(
            f"Loaded {registry.count(Kind.COMMAND)} commands and "
            f"{registry.count(Kind.AGENT)} agents from {self.config.root}"
        )
        return registry

    def load_file(self, kind: Kind, path: Path, kind_root: Path) -> Definition:
        """
        Parse one source file into a Definition.

        Args:
            kind: Kind of the file's tree
            path: Source file
            kind_root: Root directory of that kind, used to derive category

        Returns:
            Validated Definition
        """
        logger.debug(f"Parsing {kind} {path}")
        parse_fn = self._parse_command if kind is Kind.COMMAND else self._parse_agent

        try:
            content = path.read_text(encoding="utf-8")
            return parse_definition(
                content, path.stem, self._with_location(parse_fn, path, kind_root)
            )
        except DefError:
            raise
        except (yaml.YAMLError, ValueError, OSError) as e:
            raise InvalidDefError(kind.value, path.stem, str(e), self._display_path(path))

    def _kind_roots(self) -> dict[Kind, Path]:
        return {
            Kind.COMMAND: self.config.commands_path,
            Kind.AGENT: self.config.agents_path,
        }

    def _with_location(
        self, parse_fn: Callable[..., Definition], path: Path, kind_root: Path
    ) -> ParseFn:
        """Bind source location to a parse callback."""
        category = path.parent.relative_to(kind_root).as_posix()
        location = {
            "category": None if category == "." else category,
            "source_path": self._display_path(path),
        }

        def parse(def_id: str, frontmatter: dict[str, Any], body: str) -> Definition:
            return parse_fn(def_id, frontmatter, body, **location)

        return parse

    def _parse_command(
        self,
        def_id: str,
        frontmatter: dict[str, Any],
        body: str,
        category: str | None,
        source_path: Path,
    ) -> Definition:
        """Parse command definition from frontmatter (callback for parse_definition)."""
        self._require(Kind.COMMAND, def_id, frontmatter, ["description"], source_path)
        body = body.strip()
        takes_arguments = validate_template(def_id, body, self.config.placeholder)

        return self._build(
            Kind.COMMAND,
            def_id,
            source_path,
            identifier=def_id,
            description=frontmatter["description"],
            body=body,
            model_hint=frontmatter.get("model"),
            color_hint=frontmatter.get("color"),
            argument_hint=frontmatter.get("argument-hint"),
            category=category,
            takes_arguments=takes_arguments,
        )

    def _parse_agent(
        self,
        def_id: str,
        frontmatter: dict[str, Any],
        body: str,
        category: str | None,
        source_path: Path,
    ) -> Definition:
        """Parse agent definition from frontmatter (callback for parse_definition)."""
        self._require(Kind.AGENT, def_id, frontmatter, ["name", "description"], source_path)
        declared = str(frontmatter["name"])
        if declared != def_id:
            raise IdentifierMismatchError(declared, def_id, source_path)

        body = body.strip()
        takes_arguments = validate_template(def_id, body, self.config.placeholder)

        return self._build(
            Kind.AGENT,
            def_id,
            source_path,
            identifier=declared,
            description=frontmatter["description"],
            body=body,
            model_hint=frontmatter.get("model"),
            color_hint=frontmatter.get("color"),
            argument_hint=frontmatter.get("argument-hint"),
            tools=_parse_tools(frontmatter.get("tools")),
            category=category,
            takes_arguments=takes_arguments,
        )

    def _require(
        self,
        kind: Kind,
        def_id: str,
        frontmatter: dict[str, Any],
        fields: list[str],
        source_path: Path,
    ) -> None:
        if not frontmatter:
            raise InvalidDefError(kind.value, def_id, "no valid frontmatter", source_path)
        for field in fields:
            if frontmatter.get(field) is None:
                raise InvalidDefError(
                    kind.value, def_id, f"missing required field: {field}", source_path
                )

    def _build(self, kind: Kind, def_id: str, source_path: Path, **fields: Any) -> Definition:
        try:
            return Definition(kind=kind, source_path=source_path, **fields)
        except ValidationError as e:
            reasons = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'definition'}: {err['msg']}"
                for err in e.errors()
            )
            raise InvalidDefError(kind.value, def_id, reasons, source_path)

    def _cross_validate(self, manifest: Manifest, store: DefinitionStore) -> None:
        """Check that the manifest and the parsed files match one to one."""
        for entry in manifest.entries:
            if entry.key not in store:
                raise MissingDefinitionError(entry.kind.value, entry.identifier, entry.source)

            if entry.source is not None:
                found = store.get(entry.kind, entry.identifier).source_path
                if not self._same_file(entry.source, found):
                    raise MissingDefinitionError(entry.kind.value, entry.identifier, entry.source)

        expected = manifest.keys()
        for kind in Kind:
            for definition in store.list(kind):
                if definition.key not in expected:
                    raise UnregisteredDefinitionError(
                        kind.value, definition.identifier, definition.source_path
                    )

    def _same_file(self, declared: Path, found: Path | None) -> bool:
        if found is None:
            return False
        root = self.config.root
        return (root / declared).resolve() == (root / found).resolve()

    def _display_path(self, path: Path) -> Path:
        if path.is_relative_to(self.config.root):
            return path.relative_to(self.config.root)
        return path


def _parse_tools(value: Any) -> tuple[str, ...]:
    """Accept a YAML list or a comma-separated string of tool names."""
    if value is None:
        return ()
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, list):
        items = [str(v) for v in value]
    else:
        raise ValueError(f"tools must be a list or comma-separated string, got: {value!r}")
    return tuple(item.strip() for item in items if item.strip())
