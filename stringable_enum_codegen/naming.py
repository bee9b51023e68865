"""Generate names from our ``Pascal_case`` for the respective targets."""

from icontract import ensure, require

from stringable_enum_codegen.common import Identifier


def lower_snake_case(identifier: Identifier) -> Identifier:
    """
    Convert the identifier to a ``lower_snake_case``.

    >>> lower_snake_case(Identifier("Log_level"))
    'log_level'
    """
    parts = identifier.split("_")

    assert len(parts) > 0, "Expected at least one part in the identifier"

    return Identifier("_".join(part.lower() for part in parts))


def upper_snake_case(identifier: Identifier) -> Identifier:
    """
    Convert the identifier to an ``UPPER_SNAKE_CASE``.

    >>> upper_snake_case(Identifier("Other_gibberish"))
    'OTHER_GIBBERISH'
    """
    parts = identifier.split("_")

    assert len(parts) > 0, "Expected at least one part in the identifier"

    return Identifier("_".join(part.upper() for part in parts))


def capitalized_camel_case(identifier: Identifier) -> Identifier:
    """
    Convert the identifier to a ``CamelCase``.

    >>> capitalized_camel_case(Identifier("No_display_enum"))
    'NoDisplayEnum'
    """
    parts = identifier.split("_")
    return Identifier("".join(part.capitalize() for part in parts))


# fmt: off
@require(
    lambda identifier: identifier[0].isupper(),
    "The enumeration name must start with a capital letter"
)
@ensure(
    lambda result: "_" not in result
)
# fmt: on
def json_definition_name(identifier: Identifier) -> Identifier:
    """
    Generate the name of the JSON schema definition of an enumeration.

    >>> json_definition_name(Identifier("Color"))
    'Color'

    >>> json_definition_name(Identifier("Log_level"))
    'LogLevel'

    >>> json_definition_name(Identifier("URL_scheme"))
    'UrlScheme'
    """
    return capitalized_camel_case(identifier)
