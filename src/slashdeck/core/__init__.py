"""Definition registry and invocation resolution."""

from .context import SharedContext
from .definition import Definition, Kind, ManifestEntry
from .exceptions import (
    DefError,
    DefNotFoundError,
    DuplicateIdentifierError,
    EmptyInvocationError,
    IdentifierMismatchError,
    InvalidDefError,
    InvalidIdentifierError,
    InvalidManifestError,
    MalformedTemplateError,
    MissingDefinitionError,
    RegistryNotLoadedError,
    UnregisteredDefinitionError,
)
from .loader import RegistryLoader
from .manifest import Manifest, load_manifest
from .registry import LiveRegistry, Registry
from .resolver import InvocationResolver, InvocationResult, Resolution, parse_invocation
from .store import DefinitionStore
from .template import PLACEHOLDER, render

__all__ = [
    "SharedContext",
    "Definition",
    "Kind",
    "ManifestEntry",
    "DefError",
    "DefNotFoundError",
    "DuplicateIdentifierError",
    "EmptyInvocationError",
    "IdentifierMismatchError",
    "InvalidDefError",
    "InvalidIdentifierError",
    "InvalidManifestError",
    "MalformedTemplateError",
    "MissingDefinitionError",
    "RegistryNotLoadedError",
    "UnregisteredDefinitionError",
    "RegistryLoader",
    "Manifest",
    "load_manifest",
    "LiveRegistry",
    "Registry",
    "InvocationResolver",
    "InvocationResult",
    "Resolution",
    "parse_invocation",
    "DefinitionStore",
    "PLACEHOLDER",
    "render",
]
