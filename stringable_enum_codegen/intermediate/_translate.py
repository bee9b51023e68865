"""Translate the parsed representation into the intermediate representation."""
import textwrap
from typing import (
    List,
    Optional,
    MutableMapping,
    Tuple,
)

import asttokens
import docutils.nodes
from icontract import ensure

from stringable_enum_codegen import parse
from stringable_enum_codegen.common import Error, Stripped
from stringable_enum_codegen.intermediate._types import (
    Description,
    Enumeration,
    EnumerationLiteral,
    ImplementationSpecificMethod,
    MetaModel,
    SymbolTable,
)


def _to_description(parsed: parse.Description) -> Description:
    """Translate the parsed docstring into an intermediate one."""
    text = Stripped(textwrap.dedent(parsed.text).strip())

    summary = None  # type: Optional[Stripped]

    # The summary is only defined if the docstring starts with a plain paragraph.
    # Section titles, field lists and other block elements do not count.
    if len(parsed.document.children) > 0 and isinstance(
        parsed.document.children[0], docutils.nodes.paragraph
    ):
        summary_text = parsed.document.children[0].astext().strip()
        if len(summary_text) > 0:
            summary = Stripped(summary_text)

    return Description(summary=summary, text=text, parsed=parsed)


def _to_optional_description(
    parsed: Optional[parse.Description],
) -> Optional[Description]:
    """Translate the parsed docstring, if specified."""
    if parsed is None:
        return None

    return _to_description(parsed)


# fmt: off
@ensure(
    lambda result:
    not (result[0] is not None)
    or len(result[0].literals) > 0
)
@ensure(lambda result: (result[0] is None) ^ (result[1] is None))
# fmt: on
def _to_enumeration(
    parsed: parse.Enumeration,
) -> Tuple[Optional[Enumeration], Optional[Error]]:
    """Translate an enumeration and check its binding table."""
    errors = []  # type: List[Error]

    if len(parsed.literals) == 0:
        errors.append(
            Error(
                parsed.node,
                f"The enumeration {parsed.name!r} has no variants; "
                f"at least one variant must be bound to a token",
            )
        )

    first_literal_by_value = (
        dict()
    )  # type: MutableMapping[str, parse.EnumerationLiteral]

    for parsed_literal in parsed.literals:
        if len(parsed_literal.value) == 0:
            errors.append(
                Error(
                    parsed_literal.node,
                    f"The token of the variant {parsed_literal.name!r} "
                    f"in the enumeration {parsed.name!r} is empty",
                )
            )
            continue

        another_literal = first_literal_by_value.get(parsed_literal.value, None)
        if another_literal is not None:
            errors.append(
                Error(
                    parsed_literal.node,
                    f"The token {parsed_literal.value!r} of the variant "
                    f"{parsed_literal.name!r} in the enumeration {parsed.name!r} "
                    f"has been already bound to the variant "
                    f"{another_literal.name!r}; tokens must be unique "
                    f"so that the parsing is unambiguous",
                )
            )
        else:
            first_literal_by_value[parsed_literal.value] = parsed_literal

    if len(errors) > 0:
        return None, Error(
            parsed.node,
            f"The binding table of the enumeration {parsed.name!r} is invalid",
            errors,
        )

    literals = [
        EnumerationLiteral(
            name=parsed_literal.name,
            value=parsed_literal.value,
            description=_to_optional_description(parsed_literal.description),
            parsed=parsed_literal,
        )
        for parsed_literal in parsed.literals
    ]

    methods = [
        ImplementationSpecificMethod(
            name=parsed_method.name,
            description=_to_optional_description(parsed_method.description),
            parsed=parsed_method,
        )
        for parsed_method in parsed.methods
    ]

    return (
        Enumeration(
            name=parsed.name,
            literals=literals,
            methods=methods,
            display=parsed.display,
            description=_to_optional_description(parsed.description),
            parsed=parsed,
        ),
        None,
    )


@ensure(lambda result: (result[0] is None) ^ (result[1] is None))
def translate(
    parsed_symbol_table: parse.SymbolTable,
    atok: asttokens.ASTTokens,
) -> Tuple[Optional[SymbolTable], Optional[Error]]:
    """
    Translate the parsed symbols into intermediate symbols.

    Every enumeration is compiled into a binding table with a catalogue. Empty
    enumerations, empty tokens and tokens shared by multiple variants are
    reported as errors.
    """
    enumerations = []  # type: List[Enumeration]
    underlying_errors = []  # type: List[Error]

    for parsed_enumeration in parsed_symbol_table.enumerations:
        enumeration, error = _to_enumeration(parsed_enumeration)
        if error is not None:
            underlying_errors.append(error)
        else:
            assert enumeration is not None
            enumerations.append(enumeration)

    if len(underlying_errors) > 0:
        assert atok.tree is not None
        return None, Error(
            atok.tree,
            "Failed to translate the parsed symbol table "
            "to an intermediate symbol table",
            underlying_errors,
        )

    return (
        SymbolTable(
            enumerations=enumerations,
            meta_model=MetaModel(
                description=_to_optional_description(
                    parsed_symbol_table.meta_model.description
                )
            ),
        ),
        None,
    )

