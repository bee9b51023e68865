"""Generate the Python enumerations with their string bindings."""
import io
import keyword
import textwrap
from typing import (
    Optional,
    Dict,
    List,
    Tuple,
    cast,
    FrozenSet,
)

from icontract import ensure, require

from stringable_enum_codegen import intermediate
from stringable_enum_codegen import specific_implementations
from stringable_enum_codegen.common import (
    Error,
    Identifier,
    Stripped,
)
from stringable_enum_codegen.python import (
    common as python_common,
    naming as python_naming,
)
from stringable_enum_codegen.python.common import INDENT as I


# region Checks

#: Names imported or defined at the top of the generated module
_RESERVED_MODULE_NAMES = frozenset(
    ["enum", "types", "Final", "Mapping", "Optional", "Tuple"]
)  # type: FrozenSet[str]

#: Names of the members generated in every enumeration or inherited from ``enum.Enum``
_RESERVED_MEMBER_NAMES = frozenset(
    ["to_token", "parse", "name", "value"]
)  # type: FrozenSet[str]


def _module_level_names(
    enumeration: intermediate.Enumeration,
) -> List[Tuple[Identifier, str]]:
    """List the module-level Python names emitted for ``enumeration``."""
    return [
        (python_naming.enum_name(enumeration.name), "the class"),
        (python_naming.num_variants_name(enumeration.name), "the number of variants"),
        (python_naming.variants_name(enumeration.name), "the variants"),
        (python_naming.tokens_name(enumeration.name), "the tokens"),
        (python_naming.to_token_map_name(enumeration.name), "the map to tokens"),
        (python_naming.from_token_map_name(enumeration.name), "the map from tokens"),
    ]


def _verify_enumeration_name_collisions(
    symbol_table: intermediate.SymbolTable,
) -> List[Error]:
    """Verify that the module-level Python names of the enumerations do not collide."""
    errors = []  # type: List[Error]

    observed_names = dict()  # type: Dict[Identifier, str]

    for enumeration in symbol_table.enumerations:
        for name, what in _module_level_names(enumeration):
            described = f"{what} of the enumeration {enumeration.name!r}"

            if keyword.iskeyword(name):
                errors.append(
                    Error(
                        enumeration.parsed.node,
                        f"The Python name {name!r} for {described} "
                        f"is a Python keyword",
                    )
                )
                continue

            if name in _RESERVED_MODULE_NAMES:
                errors.append(
                    Error(
                        enumeration.parsed.node,
                        f"The Python name {name!r} for {described} "
                        f"is reserved by the generated module",
                    )
                )
                continue

            other = observed_names.get(name, None)
            if other is not None:
                errors.append(
                    Error(
                        enumeration.parsed.node,
                        f"The Python name {name!r} for {described} "
                        f"collides with the same name for {other}",
                    )
                )
            else:
                observed_names[name] = described

    return errors


def _verify_intra_enumeration_collisions(
    enumeration: intermediate.Enumeration,
) -> Optional[Error]:
    """Verify that no member names collide in the Python class of ``enumeration``."""
    errors = []  # type: List[Error]

    observed_member_names = {}  # type: Dict[Identifier, str]

    for literal in enumeration.literals:
        literal_name = python_naming.enum_literal_name(literal.name)

        if literal_name in observed_member_names:
            errors.append(
                Error(
                    literal.parsed.node,
                    f"Python member {literal_name!r} corresponding "
                    f"to the literal {literal.name!r} collides with "
                    f"the {observed_member_names[literal_name]}",
                )
            )
        else:
            observed_member_names[literal_name] = (
                f"Python member {literal_name!r} corresponding to "
                f"the literal {literal.name!r}"
            )

    for method in enumeration.methods:
        method_name = python_naming.method_name(method.name)

        if keyword.iskeyword(method_name):
            errors.append(
                Error(
                    method.parsed.node,
                    f"Python method {method_name!r} corresponding "
                    f"to the implementation-specific method {method.name!r} "
                    f"is a Python keyword",
                )
            )
        elif method_name in _RESERVED_MEMBER_NAMES:
            errors.append(
                Error(
                    method.parsed.node,
                    f"Python method {method_name!r} corresponding "
                    f"to the implementation-specific method {method.name!r} "
                    f"collides with a generated or inherited member",
                )
            )
        elif method_name in observed_member_names:
            errors.append(
                Error(
                    method.parsed.node,
                    f"Python method {method_name!r} corresponding "
                    f"to the implementation-specific method {method.name!r} "
                    f"collides with the {observed_member_names[method_name]}",
                )
            )
        else:
            observed_member_names[method_name] = (
                f"Python method {method_name!r} corresponding to "
                f"the implementation-specific method {method.name!r}"
            )

    if len(errors) > 0:
        return Error(
            enumeration.parsed.node,
            f"Naming collision(s) in Python code "
            f"for the enumeration {enumeration.name!r}",
            underlying=errors,
        )

    return None


class VerifiedIntermediateSymbolTable(intermediate.SymbolTable):
    """Represent a verified symbol table which can be used for code generation."""

    # noinspection PyInitNewSignature
    def __new__(
        cls, symbol_table: intermediate.SymbolTable
    ) -> "VerifiedIntermediateSymbolTable":
        raise AssertionError("Only for type annotation")


@ensure(lambda result: (result[0] is None) ^ (result[1] is None))
def verify(
    symbol_table: intermediate.SymbolTable,
) -> Tuple[Optional[VerifiedIntermediateSymbolTable], Optional[List[Error]]]:
    """Verify that Python code can be generated from the ``symbol_table``."""
    errors = _verify_enumeration_name_collisions(symbol_table=symbol_table)

    for enumeration in symbol_table.enumerations:
        collision_error = _verify_intra_enumeration_collisions(enumeration=enumeration)
        if collision_error is not None:
            errors.append(collision_error)

    if len(errors) > 0:
        return None, errors

    return cast(VerifiedIntermediateSymbolTable, symbol_table), None


# endregion

# region Generation


def _generate_enum_class(
    enumeration: intermediate.Enumeration,
    spec_impls: specific_implementations.SpecificImplementations,
) -> Tuple[Optional[Stripped], Optional[Error]]:
    """Generate the class of the ``enumeration`` with its conversions."""
    name = python_naming.enum_name(enumeration.name)

    blocks = []  # type: List[str]

    if enumeration.description is not None:
        blocks.append(python_common.docstring(enumeration.description.text))
    else:
        blocks.append("# pylint: disable=missing-class-docstring")

    for literal in enumeration.literals:
        writer = io.StringIO()
        if literal.description is not None:
            writer.write(
                python_common.documentation_comment(literal.description.text)
            )
            writer.write("\n")

        literal_name = python_naming.enum_literal_name(literal.name)
        writer.write(
            f"{literal_name} = "
            f"{python_common.string_literal(enumeration.token_of(literal))}"
        )
        blocks.append(writer.getvalue())

    to_token_map = python_naming.to_token_map_name(enumeration.name)
    from_token_map = python_naming.from_token_map_name(enumeration.name)

    blocks.append(
        f"""\
def to_token(self) -> str:
{I}\"\"\"Return the token bound to this variant.\"\"\"
{I}return {to_token_map}[self]"""
    )

    blocks.append(
        f"""\
@staticmethod
def parse(text: str) -> Optional["{name}"]:
{I}\"\"\"
{I}Parse the ``text`` as a token of :py:class:`{name}`.

{I}The ``text`` must match a token exactly.

{I}:param text: to be parsed
{I}:return: the variant, or ``None`` if ``text`` is not a token
{I}\"\"\"
{I}return {from_token_map}.get(text, None)"""
    )

    if enumeration.display:
        blocks.append(
            f"""\
def __str__(self) -> str:
{I}return self.to_token()"""
        )

        blocks.append(
            f"""\
def __format__(self, format_spec: str) -> str:
{I}return format(self.to_token(), format_spec)"""
        )

    errors = []  # type: List[Error]

    for method in enumeration.methods:
        implementation_key = specific_implementations.method_key(
            enumeration_name=enumeration.name, method_name=method.name
        )

        implementation = spec_impls.get(implementation_key, None)
        if implementation is None:
            errors.append(
                Error(
                    method.parsed.node,
                    f"The implementation is missing for the implementation-specific "
                    f"method {method.name!r} of the enumeration "
                    f"{enumeration.name!r}: {implementation_key}",
                )
            )
        else:
            blocks.append(implementation)

    if len(errors) > 0:
        return None, Error(
            enumeration.parsed.node,
            f"Failed to generate the Python code "
            f"for the enumeration {enumeration.name!r}",
            errors,
        )

    writer = io.StringIO()
    writer.write(f"class {name}(enum.Enum):\n")
    for i, block in enumerate(blocks):
        if i > 0:
            writer.write("\n\n")

        writer.write(textwrap.indent(block, I))

    return Stripped(writer.getvalue()), None


@require(lambda enumeration: len(enumeration.literals) > 0)
def _generate_catalogue(enumeration: intermediate.Enumeration) -> Stripped:
    """Generate the catalogue and the conversion maps of the ``enumeration``."""
    name = python_naming.enum_name(enumeration.name)
    catalogue = enumeration.catalogue

    members = [
        f"{name}.{python_naming.enum_literal_name(literal.name)}"
        for literal in catalogue.variants
    ]
    tokens = [python_common.string_literal(token) for token in catalogue.tokens]

    variants_writer = io.StringIO()
    tokens_writer = io.StringIO()
    to_token_writer = io.StringIO()
    from_token_writer = io.StringIO()

    for member, token in zip(members, tokens):
        variants_writer.write(f"{I}{member},\n")
        tokens_writer.write(f"{I}{token},\n")
        to_token_writer.write(f"{I}{I}{member}: {token},\n")
        from_token_writer.write(f"{I}{I}{token}: {member},\n")

    num_variants = python_naming.num_variants_name(enumeration.name)
    variants = python_naming.variants_name(enumeration.name)
    tokens_constant = python_naming.tokens_name(enumeration.name)
    to_token_map = python_naming.to_token_map_name(enumeration.name)
    from_token_map = python_naming.from_token_map_name(enumeration.name)

    return Stripped(
        f"""\
#: Number of the variants of :py:class:`{name}`
{num_variants}: Final[int] = {catalogue.num_variants}

#: Variants of :py:class:`{name}` in the order of the binding table
{variants}: Final[Tuple[{name}, ...]] = (
{variants_writer.getvalue()})

#: Tokens of :py:class:`{name}` aligned with :py:data:`{variants}`
{tokens_constant}: Final[Tuple[str, ...]] = (
{tokens_writer.getvalue()})

{to_token_map}: Final[Mapping[{name}, str]] = types.MappingProxyType(
{I}{{
{to_token_writer.getvalue()}{I}}}
)

{from_token_map}: Final[Mapping[str, {name}]] = types.MappingProxyType(
{I}{{
{from_token_writer.getvalue()}{I}}}
)"""
    )


@ensure(lambda result: (result[0] is None) ^ (result[1] is None))
def generate(
    symbol_table: VerifiedIntermediateSymbolTable,
    spec_impls: specific_implementations.SpecificImplementations,
) -> Tuple[Optional[str], Optional[List[Error]]]:
    """Generate the Python code of the enumerations based on the symbol table."""
    errors = []  # type: List[Error]

    blocks = []  # type: List[Stripped]

    if symbol_table.meta_model.description is not None:
        blocks.append(
            python_common.docstring(symbol_table.meta_model.description.text)
        )

    blocks.append(python_common.WARNING)

    imports_writer = io.StringIO()
    imports_writer.write(
        f"""\
import enum
import types
from typing import (
{I}Final,
{I}Mapping,
{I}Optional,
{I}Tuple,
)"""
    )

    imports_snippet = spec_impls.get(specific_implementations.IMPORTS_KEY, None)
    if imports_snippet is not None:
        imports_writer.write(f"\n\n{imports_snippet}")

    blocks.append(Stripped(imports_writer.getvalue()))

    for enumeration in symbol_table.enumerations:
        block, error = _generate_enum_class(
            enumeration=enumeration, spec_impls=spec_impls
        )
        if error is not None:
            errors.append(error)
            continue

        assert block is not None
        blocks.append(block)
        blocks.append(_generate_catalogue(enumeration=enumeration))

    if len(errors) > 0:
        return None, errors

    blocks.append(python_common.WARNING)

    out = io.StringIO()
    for i, block in enumerate(blocks):
        if i > 0:
            out.write("\n\n\n")

        out.write(block)

    out.write("\n")

    return out.getvalue(), None


# endregion
