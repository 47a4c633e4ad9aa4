"""Resolve typed invocations to definitions and render them."""

import logging
from dataclasses import dataclass
from typing import Callable

from slashdeck.core.definition import Definition, Kind, is_valid_identifier
from slashdeck.core.exceptions import (
    DefError,
    EmptyInvocationError,
    InvalidIdentifierError,
)
from slashdeck.core.registry import LiveRegistry, Registry
from slashdeck.core.template import PLACEHOLDER, render

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """A definition matched by an invocation, with the text typed after it."""

    definition: Definition
    argument_text: str


@dataclass
class InvocationResult:
    """Result of executing an invocation."""

    text: str | None = None
    error: DefError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_invocation(raw: str, marker: str = "/") -> tuple[str, str]:
    """
    Split an invocation into identifier and argument text.

    Args:
        raw: Input such as "/api-new create a user endpoint"
        marker: Command marker stripped once from the front, if present

    Returns:
        Tuple of (identifier, argument_text). argument_text is everything
        after the identifier and the whitespace following it, unchanged.

    Raises:
        EmptyInvocationError: No identifier in the input
    """
    text = raw.lstrip()
    if text.startswith(marker):
        text = text[len(marker) :]

    parts = text.split(None, 1)
    if not parts:
        raise EmptyInvocationError(raw)

    identifier = parts[0]
    argument_text = parts[1] if len(parts) > 1 else ""
    return identifier, argument_text


class InvocationResolver:
    """Maps invocations onto the currently published registry."""

    @staticmethod
    def from_live(
        live: LiveRegistry, placeholder: str = PLACEHOLDER, marker: str = "/"
    ) -> "InvocationResolver":
        return InvocationResolver(lambda: live.current, placeholder, marker)

    def __init__(
        self,
        registry_source: Callable[[], Registry],
        placeholder: str = PLACEHOLDER,
        marker: str = "/",
    ):
        """
        Initialize InvocationResolver.

        Args:
            registry_source: Returns the registry to resolve against; called
                once per invocation
            placeholder: Placeholder token substituted on render
            marker: Command marker character
        """
        self._registry_source = registry_source
        self.placeholder = placeholder
        self.marker = marker

    def resolve(self, kind: Kind, raw: str) -> Resolution:
        """
        Find the definition an invocation names.

        Raises:
            EmptyInvocationError: No identifier given
            InvalidIdentifierError: Identifier outside [a-z0-9-]
            DefNotFoundError: No definition of that kind has the identifier
        """
        identifier, argument_text = parse_invocation(raw, self.marker)
        if not is_valid_identifier(identifier):
            raise InvalidIdentifierError(identifier)

        definition = self._registry_source().get(kind, identifier)
        logger.debug(f"Resolved {raw!r} to {kind} '{identifier}'")
        return Resolution(definition, argument_text)

    def resolve_and_render(self, kind: Kind, raw: str) -> str:
        """Resolve an invocation and return the rendered prompt text."""
        resolution = self.resolve(kind, raw)
        return render(
            resolution.definition.body, resolution.argument_text, self.placeholder
        )

    def execute(self, kind: Kind, raw: str) -> InvocationResult:
        """
        Resolve and render, reporting failures in the result.

        Returns:
            InvocationResult with text on success or error on failure
        """
        try:
            return InvocationResult(text=self.resolve_and_render(kind, raw))
        except DefError as e:
            logger.info(f"Invocation {raw!r} failed: {e}")
            return InvocationResult(error=e)

