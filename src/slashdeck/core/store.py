"""In-memory store of loaded definitions."""

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from slashdeck.core.definition import Definition, Kind
from slashdeck.core.exceptions import DefNotFoundError, DuplicateIdentifierError


class DefinitionListing:
    """Sorted, re-iterable view over the definitions of one kind."""

    def __init__(self, entries: Mapping[str, Definition]):
        self._entries = entries

    def __iter__(self) -> Iterator[Definition]:
        for identifier in sorted(self._entries):
            yield self._entries[identifier]

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)


class DefinitionStore:
    """Definitions keyed by kind and identifier."""

    def __init__(self) -> None:
        self._definitions: dict[Kind, dict[str, Definition]] = {
            kind: {} for kind in Kind
        }
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def put(self, definition: Definition) -> None:
        """Insert a definition.

        Raises:
            DuplicateIdentifierError: Same kind and identifier already stored
            RuntimeError: Store has been frozen
        """
        if self._frozen:
            raise RuntimeError("Cannot add definitions to a frozen store")

        by_id = self._definitions[definition.kind]
        if definition.identifier in by_id:
            raise DuplicateIdentifierError(
                definition.kind.value, definition.identifier, definition.source_path
            )
        by_id[definition.identifier] = definition

    def get(self, kind: Kind, identifier: str) -> Definition:
        """Look up a definition.

        Raises:
            DefNotFoundError: Nothing of this kind has the identifier
        """
        definition = self._definitions[kind].get(identifier)
        if definition is None:
            raise DefNotFoundError(kind.value, identifier)
        return definition

    def categories(self, kind: Kind) -> list[str]:
        return sorted(
            {d.category for d in self._definitions[kind].values() if d.category}
        )

    # Must stay below any method annotated with the builtin list
    def list(self, kind: Kind) -> DefinitionListing:
        """Definitions of one kind, sorted by identifier."""
        return DefinitionListing(self._definitions[kind])

    def freeze(self) -> None:
        """Make the store read-only."""
        if self._frozen:
            return
        self._definitions = {
            kind: MappingProxyType(dict(by_id))  # type: ignore[misc]
            for kind, by_id in self._definitions.items()
        }
        self._frozen = True

    def __len__(self) -> int:
        return sum(len(by_id) for by_id in self._definitions.values())

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        kind, identifier = key
        return identifier in self._definitions.get(kind, {})
