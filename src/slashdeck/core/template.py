"""Argument placeholder substitution for definition bodies."""

from slashdeck.core.exceptions import MalformedTemplateError

PLACEHOLDER = "$ARGUMENTS"


def count_placeholders(body: str, placeholder: str = PLACEHOLDER) -> int:
    return body.count(placeholder)


def validate_template(def_id: str, body: str, placeholder: str = PLACEHOLDER) -> bool:
    """
    Check a body at load time.

    Args:
        def_id: Identifier used in the error message
        body: Template body
        placeholder: Placeholder token

    Returns:
        True if the body contains the placeholder, False otherwise

    Raises:
        MalformedTemplateError: Placeholder occurs more than once
    """
    occurrences = count_placeholders(body, placeholder)
    if occurrences > 1:
        raise MalformedTemplateError(def_id, placeholder, occurrences)
    return occurrences == 1


def render(body: str, argument_text: str, placeholder: str = PLACEHOLDER) -> str:
    """
    Replace the placeholder in body with argument_text.

    The argument text is inserted verbatim. A body without a placeholder is
    returned unchanged and the argument text is dropped.

    Args:
        body: Validated template body
        argument_text: Text typed after the command name

    Returns:
        Rendered prompt text
    """
    return body.replace(placeholder, argument_text, 1)
