"""Generate Python identifiers based on the identifiers from the binding model."""
from icontract import require

from stringable_enum_codegen import naming
from stringable_enum_codegen.common import Identifier


# fmt: off
@require(
    lambda identifier: identifier[0].isupper(),
    "Enumeration name must start with a capital letter"
)
# fmt: on
def enum_name(identifier: Identifier) -> Identifier:
    """
    Generate a name for an enum based on its model ``identifier``.

    >>> enum_name(Identifier("Color"))
    'Color'

    >>> enum_name(Identifier("Log_level"))
    'LogLevel'

    >>> enum_name(Identifier("URL_scheme"))
    'URLScheme'
    """
    parts = identifier.split("_")

    return Identifier(
        "".join(part if part.upper() == part else part.capitalize() for part in parts)
    )


def enum_literal_name(identifier: Identifier) -> Identifier:
    """
    Generate a name for an enum literal based on its model ``identifier``.

    >>> enum_literal_name(Identifier("Always"))
    'ALWAYS'

    >>> enum_literal_name(Identifier("Warn_or_worse"))
    'WARN_OR_WORSE'
    """
    return naming.upper_snake_case(identifier)


def constant_name(identifier: Identifier) -> Identifier:
    """
    Generate a name for a public constant based on the ``identifier``.

    >>> constant_name(Identifier("Log_level_num_variants"))
    'LOG_LEVEL_NUM_VARIANTS'
    """
    return naming.upper_snake_case(identifier)


def private_constant_name(identifier: Identifier) -> Identifier:
    """
    Generate a name for a private constant based on the ``identifier``.

    >>> private_constant_name(Identifier("Color_to_token"))
    '_COLOR_TO_TOKEN'
    """
    return Identifier(f"_{naming.upper_snake_case(identifier)}")


def num_variants_name(enumeration_name: Identifier) -> Identifier:
    """
    Generate the name of the constant holding the number of the variants.

    >>> num_variants_name(Identifier("Log_level"))
    'LOG_LEVEL_NUM_VARIANTS'
    """
    return constant_name(Identifier(f"{enumeration_name}_num_variants"))


def variants_name(enumeration_name: Identifier) -> Identifier:
    """
    Generate the name of the constant holding the catalogue of the variants.

    >>> variants_name(Identifier("Log_level"))
    'LOG_LEVEL_VARIANTS'
    """
    return constant_name(Identifier(f"{enumeration_name}_variants"))


def tokens_name(enumeration_name: Identifier) -> Identifier:
    """
    Generate the name of the constant holding the catalogue of the tokens.

    >>> tokens_name(Identifier("Log_level"))
    'LOG_LEVEL_TOKENS'
    """
    return constant_name(Identifier(f"{enumeration_name}_tokens"))


def to_token_map_name(enumeration_name: Identifier) -> Identifier:
    """
    Generate the name of the private mapping from variants to tokens.

    >>> to_token_map_name(Identifier("Color"))
    '_COLOR_TO_TOKEN'
    """
    return private_constant_name(Identifier(f"{enumeration_name}_to_token"))


def from_token_map_name(enumeration_name: Identifier) -> Identifier:
    """
    Generate the name of the private mapping from tokens to variants.

    >>> from_token_map_name(Identifier("Color"))
    '_COLOR_FROM_TOKEN'
    """
    return private_constant_name(Identifier(f"{enumeration_name}_from_token"))


def method_name(identifier: Identifier) -> Identifier:
    """
    Generate a name for a method based on its model ``identifier``.

    >>> method_name(Identifier("to_logging"))
    'to_logging'

    >>> method_name(Identifier("detect_TTY"))
    'detect_tty'
    """
    return naming.lower_snake_case(identifier)
