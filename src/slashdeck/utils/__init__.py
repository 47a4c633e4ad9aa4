"""Utilities package."""

from slashdeck.utils.config import Config
from slashdeck.utils.def_loader import (
    DefError,
    DefNotFoundError,
    InvalidDefError,
    find_definition_files,
    parse_definition,
    split_frontmatter,
)
from slashdeck.utils.logging import setup_logging

__all__ = [
    "Config",
    "DefError",
    "DefNotFoundError",
    "InvalidDefError",
    "find_definition_files",
    "parse_definition",
    "split_frontmatter",
    "setup_logging",
]
