"""Custom exceptions for slashdeck."""

from pathlib import Path

from slashdeck.utils.def_loader import DefError, DefNotFoundError, InvalidDefError

__all__ = [
    "DefError",
    "DefNotFoundError",
    "InvalidDefError",
    "DuplicateIdentifierError",
    "MalformedTemplateError",
    "EmptyInvocationError",
    "InvalidIdentifierError",
    "IdentifierMismatchError",
    "MissingDefinitionError",
    "UnregisteredDefinitionError",
    "InvalidManifestError",
    "RegistryNotLoadedError",
]


class DuplicateIdentifierError(DefError):
    """Two definitions of the same kind share an identifier."""

    def __init__(self, kind: str, def_id: str, path: Path | None = None):
        location = f" ({path})" if path is not None else ""
        super().__init__(f"Duplicate {kind} identifier: {def_id}{location}")
        self.kind = kind
        self.def_id = def_id
        self.path = path


class MalformedTemplateError(DefError):
    """Template body contains the placeholder more than once."""

    def __init__(self, def_id: str, placeholder: str, occurrences: int):
        super().__init__(
            f"Template '{def_id}' contains {placeholder} {occurrences} times "
            "(at most once allowed)"
        )
        self.def_id = def_id
        self.placeholder = placeholder
        self.occurrences = occurrences


class EmptyInvocationError(DefError):
    """Invocation has no identifier."""

    def __init__(self, raw: str):
        super().__init__("Empty invocation: no command name given")
        self.raw = raw


class InvalidIdentifierError(DefError):
    """Identifier contains characters outside [a-z0-9-]."""

    def __init__(self, def_id: str):
        super().__init__(
            f"Invalid identifier '{def_id}': "
            "only lowercase letters, digits and hyphens are allowed"
        )
        self.def_id = def_id


class IdentifierMismatchError(DefError):
    """Agent's declared name differs from its file name."""

    def __init__(self, declared: str, expected: str, path: Path):
        super().__init__(
            f"Agent name '{declared}' does not match file name '{expected}' ({path})"
        )
        self.declared = declared
        self.expected = expected
        self.path = path


class MissingDefinitionError(DefError):
    """Manifest lists a definition that has no matching source file."""

    def __init__(self, kind: str, def_id: str, path: Path | None = None):
        location = f" (expected at {path})" if path is not None else ""
        super().__init__(f"Manifest {kind} '{def_id}' has no source file{location}")
        self.kind = kind
        self.def_id = def_id
        self.path = path


class UnregisteredDefinitionError(DefError):
    """Source file defines something the manifest doesn't list."""

    def __init__(self, kind: str, def_id: str, path: Path):
        super().__init__(f"{kind.capitalize()} '{def_id}' is not in the manifest ({path})")
        self.kind = kind
        self.def_id = def_id
        self.path = path


class InvalidManifestError(DefError):
    """Manifest file is missing or malformed."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Invalid manifest {path}: {reason}")
        self.path = path
        self.reason = reason


class RegistryNotLoadedError(DefError):
    """No registry has been published yet."""

    def __init__(self) -> None:
        super().__init__("Registry has not been loaded")
