"""Provide the types into which we parse the original binding model."""
import ast
import os
import pathlib
from typing import Sequence, Optional, Final, Mapping, cast

import docutils.nodes
from icontract import require, DBC, invariant

from stringable_enum_codegen.common import Identifier

_MODULE_NAME = pathlib.Path(os.path.realpath(__file__)).parent.name


class Description:
    """Represent a docstring describing something in the binding model."""

    @require(lambda node: isinstance(node.value, str))
    def __init__(self, document: docutils.nodes.document, node: ast.Constant) -> None:
        """Initialize with the given values."""
        self.document = document
        self.node = node

    @property
    def text(self) -> str:
        """Return the original text of the docstring."""
        assert isinstance(self.node.value, str)
        return self.node.value


def is_string_expr(expr: ast.AST) -> bool:
    """Check that the expression is a string literal."""
    return (
        isinstance(expr, ast.Expr)
        and isinstance(expr.value, ast.Constant)
        and isinstance(expr.value.value, str)
    )


class EnumerationLiteral:
    """Represent a single binding of a variant to its token."""

    #: Name of the variant
    name: Final[Identifier]

    #: Token bound to the variant
    value: Final[str]

    #: Description of the variant, if any
    description: Final[Optional[Description]]

    #: Node of the assignment in the model's Python AST
    node: Final[ast.Assign]

    def __init__(
        self,
        name: Identifier,
        value: str,
        description: Optional[Description],
        node: ast.Assign,
    ) -> None:
        self.name = name
        self.value = value
        self.description = description
        self.node = node


class ImplementationSpecificMethod:
    """
    Represent a method of an enumeration implemented by a snippet.

    The signature is not interpreted; the snippet defines the whole method.
    """

    #: Name of the method
    name: Final[Identifier]

    #: Description of the method, if any
    description: Final[Optional[Description]]

    #: Node of the method in the model's Python AST
    node: Final[ast.FunctionDef]

    def __init__(
        self,
        name: Identifier,
        description: Optional[Description],
        node: ast.FunctionDef,
    ) -> None:
        self.name = name
        self.description = description
        self.node = node


# fmt: off
@invariant(
    lambda self:
    all(
        literal is self.literals_by_name[literal.name]
        for literal in self.literals
    ) and len(self.literals) == len(self.literals_by_name),
    "Literal map consistent on name"
)
@invariant(
    lambda self:
    len(set(method.name for method in self.methods)) == len(self.methods),
    "Method names unique"
)
# fmt: on
class Enumeration:
    """Represent an enumeration together with its binding table."""

    #: Name of the enumeration
    name: Final[Identifier]

    #: Bindings of the enumeration in the order of declaration
    literals: Final[Sequence[EnumerationLiteral]]

    #: Implementation-specific methods of the enumeration
    methods: Final[Sequence[ImplementationSpecificMethod]]

    #: If set, display hooks are generated for the enumeration
    display: Final[bool]

    #: Description of the enumeration, if any
    description: Final[Optional[Description]]

    #: Node of the enumeration in the model's Python AST
    node: Final[ast.ClassDef]

    #: Map literals by their names
    literals_by_name: Final[Mapping[Identifier, EnumerationLiteral]]

    def __init__(
        self,
        name: Identifier,
        literals: Sequence[EnumerationLiteral],
        methods: Sequence[ImplementationSpecificMethod],
        display: bool,
        description: Optional[Description],
        node: ast.ClassDef,
    ) -> None:
        self.name = name
        self.literals = literals
        self.methods = methods
        self.display = display
        self.description = description
        self.node = node

        self.literals_by_name = {
            literal.name: literal for literal in self.literals
        }  # type: Mapping[Identifier, EnumerationLiteral]

    def __repr__(self) -> str:
        """Represent the instance as a string for easier debugging."""
        return (
            f"<{_MODULE_NAME}.{self.__class__.__name__} {self.name} at 0x{id(self):x}>"
        )


class MetaModel:
    """Collect information about the underlying binding model."""

    #: Description of the binding model extracted from the module docstring
    description: Final[Optional[Description]]

    def __init__(self, description: Optional[Description]) -> None:
        self.description = description


class UnverifiedSymbolTable(DBC):
    """
    Represent the enumerations of the binding model.

    This symbol table is unverified and may contain inconsistencies.
    """

    #: List of parsed enumerations in the order of declaration
    enumerations: Final[Sequence[Enumeration]]

    #: Additional information about the source binding model
    meta_model: Final[MetaModel]

    _name_to_enumeration: Final[Mapping[Identifier, Enumeration]]

    def __init__(
        self,
        enumerations: Sequence[Enumeration],
        meta_model: MetaModel,
    ) -> None:
        """Initialize with the given values and map by name."""
        self.enumerations = enumerations
        self.meta_model = meta_model

        self._name_to_enumeration = {
            enumeration.name: enumeration for enumeration in enumerations
        }

    def find_enumeration(self, name: Identifier) -> Optional[Enumeration]:
        """Find the enumeration with the given name."""
        return self._name_to_enumeration.get(name, None)

    def must_find_enumeration(self, name: Identifier) -> Enumeration:
        """
        Find the enumeration with the given name.

        :raise: :py:class:`KeyError` if it does not exist.
        """
        enumeration = self._name_to_enumeration.get(name, None)
        if enumeration is None:
            raise KeyError(name)

        return enumeration


# noinspection PyInitNewSignature
class SymbolTable(UnverifiedSymbolTable):
    """
    Represent a symbol table that has been locally verified.

    Locality in this context means that the names are unique and valid, but
    the bindings themselves have not been compiled yet.
    """

    # fmt: off
    @require(
        lambda symbol_table: (
            names := [
                enumeration.name for enumeration in symbol_table.enumerations
            ],
            len(names) == len(set(names)),
        )[1],
        "Names of the enumerations unique; "
        "this should have been caught as an Error before",
    )
    # fmt: on
    def __new__(cls, symbol_table: UnverifiedSymbolTable) -> "SymbolTable":
        return cast(SymbolTable, symbol_table)
