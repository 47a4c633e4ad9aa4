"""Shared utilities for loading definition files (commands, agents)."""

import logging
from pathlib import Path
from typing import Any, Callable, TypeVar

import yaml

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DefError(Exception):
    """Base class for every registry and invocation failure."""


class DefNotFoundError(DefError):
    """No definition of the requested kind has this identifier."""

    def __init__(self, kind: str, def_id: str):
        super().__init__(f"{kind.capitalize()} not found: {def_id}")
        self.kind = kind
        self.def_id = def_id


class InvalidDefError(DefError):
    """Definition file is malformed."""

    def __init__(self, kind: str, def_id: str, reason: str, path: Path | None = None):
        location = f" ({path})" if path is not None else ""
        super().__init__(f"Invalid {kind} '{def_id}'{location}: {reason}")
        self.kind = kind
        self.def_id = def_id
        self.reason = reason
        self.path = path


def split_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """
    Split YAML frontmatter from the markdown body.

    Args:
        content: Raw file content

    Returns:
        Tuple of (frontmatter dict, body). The dict is empty when the
        content has no frontmatter block.

    Raises:
        yaml.YAMLError: Frontmatter is not valid YAML
        ValueError: Frontmatter is not a mapping
    """
    content = content.replace("\r\n", "\n")
    if not content.startswith("---\n"):
        return {}, content

    end_delimiter = content.find("\n---\n", 3)
    if end_delimiter == -1:
        # Closing delimiter on the last line
        if content.endswith("\n---"):
            end_delimiter = len(content) - 4
        else:
            return {}, content

    frontmatter_text = content[4:end_delimiter]
    body = content[end_delimiter + 5 :]

    raw = yaml.safe_load(frontmatter_text) if frontmatter_text.strip() else None
    if raw is None:
        return {}, body
    if not isinstance(raw, dict):
        raise ValueError("frontmatter must be a mapping")
    return raw, body


def parse_definition(
    content: str,
    def_id: str,
    parse_fn: Callable[[str, dict[str, Any], str], T],
) -> T:
    """
    Parse YAML frontmatter + markdown body with type conversion.

    Args:
        content: Raw file content
        def_id: Definition ID (passed to parse_fn for context)
        parse_fn: Callback(def_id, frontmatter, body) -> typed object

    Returns:
        The typed object returned by parse_fn

    Raises:
        Whatever parse_fn raises, plus the errors of split_frontmatter
    """
    frontmatter, body = split_frontmatter(content)
    return parse_fn(def_id, frontmatter, body)


def find_definition_files(path: Path, suffix: str = ".md") -> list[Path]:
    """
    Recursively list definition files under a directory.

    Args:
        path: Root directory of one kind of definitions
        suffix: File suffix to look for

    Returns:
        Sorted list of matching files; empty if the directory doesn't exist
    """
    if not path.exists():
        logger.warning(f"Definitions directory not found: {path}")
        return []

    return sorted(p for p in path.rglob(f"*{suffix}") if p.is_file())
