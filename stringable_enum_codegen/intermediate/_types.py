"""Provide types for the intermediate representation of the binding model."""
import os
import pathlib
from typing import (
    Sequence,
    Optional,
    Final,
    Mapping,
    FrozenSet,
    Tuple,
)

from icontract import require, invariant, ensure, DBC

from stringable_enum_codegen import parse
from stringable_enum_codegen.common import Identifier, Stripped

_MODULE_NAME = pathlib.Path(os.path.realpath(__file__)).parent.name


class Description:
    """Represent a docstring of the binding model ready for the generators."""

    #: Text of the first paragraph, if the docstring starts with a paragraph
    summary: Final[Optional[Stripped]]

    #: Dedented and stripped text of the whole docstring
    text: Final[Stripped]

    #: Original docstring from the parsed model
    parsed: Final[parse.Description]

    def __init__(
        self, summary: Optional[Stripped], text: Stripped, parsed: parse.Description
    ) -> None:
        self.summary = summary
        self.text = text
        self.parsed = parsed


class EnumerationLiteral:
    """Represent a single variant together with its token."""

    #: Name of the variant in the binding model
    name: Final[Identifier]

    #: Token bound to the variant
    value: Final[str]

    #: Description of the variant, if any
    description: Final[Optional[Description]]

    #: Relation to the parsed binding
    parsed: Final[parse.EnumerationLiteral]

    @require(lambda value: len(value) > 0)
    def __init__(
        self,
        name: Identifier,
        value: str,
        description: Optional[Description],
        parsed: parse.EnumerationLiteral,
    ) -> None:
        self.name = name
        self.value = value
        self.description = description
        self.parsed = parsed

    def __repr__(self) -> str:
        """Represent the instance as a string for easier debugging."""
        return (
            f"<{_MODULE_NAME}.{self.__class__.__name__} "
            f"{self.name}={self.value!r} at 0x{id(self):x}>"
        )


class ImplementationSpecificMethod:
    """Represent a method of an enumeration whose code comes from a snippet."""

    #: Name of the method
    name: Final[Identifier]

    #: Description of the method, if any
    description: Final[Optional[Description]]

    #: Relation to the parsed method
    parsed: Final[parse.ImplementationSpecificMethod]

    def __init__(
        self,
        name: Identifier,
        description: Optional[Description],
        parsed: parse.ImplementationSpecificMethod,
    ) -> None:
        self.name = name
        self.description = description
        self.parsed = parsed


# fmt: off
@invariant(
    lambda self:
    len(self.variants) == len(self.tokens) == self.num_variants,
    "Variants and tokens aligned in length"
)
@invariant(
    lambda self:
    all(
        variant.value == token
        for variant, token in zip(self.variants, self.tokens)
    ),
    "Token at each index belongs to the variant at the same index"
)
# fmt: on
class Catalogue(DBC):
    """
    Represent the build-time fixed catalogue of an enumeration.

    The variants and the tokens are positionally aligned: ``tokens[i]`` is
    always the token of ``variants[i]``.
    """

    #: Variants in the order of the binding table
    variants: Final[Tuple[EnumerationLiteral, ...]]

    #: Tokens in the order of the binding table
    tokens: Final[Tuple[str, ...]]

    @require(lambda literals: len(literals) > 0)
    def __init__(self, literals: Sequence[EnumerationLiteral]) -> None:
        """Derive the catalogue from the ``literals`` of the binding table."""
        self.variants = tuple(literals)
        self.tokens = tuple(literal.value for literal in literals)

    @property
    def num_variants(self) -> int:
        """Return the number of the variants."""
        return len(self.variants)


# fmt: off
@invariant(
    lambda self:
    all(
        literal is self.literals_by_value[literal.value]
        for literal in self.literals
    ),
    "Literal map by value consistent on value"
)
@invariant(
    lambda self:
    sorted(map(id, self.literals_by_value.values())) == sorted(map(id, self.literals)),
    "Literal map by value complete"
)
@invariant(
    lambda self:
    all(
        literal is self.literals_by_name[literal.name]
        for literal in self.literals
    ),
    "Literal map by name consistent on name"
)
@invariant(
    lambda self:
    sorted(map(id, self.literals_by_name.values())) == sorted(map(id, self.literals)),
    "Literal map by name complete"
)
# fmt: on
class Enumeration:
    """Represent an enumeration bound to its tokens."""

    #: Name of the enumeration
    name: Final[Identifier]

    #: Literals associated with the enumeration in the order of the binding table
    literals: Final[Sequence[EnumerationLiteral]]

    #: Implementation-specific methods to be injected by the targets
    methods: Final[Sequence[ImplementationSpecificMethod]]

    #: If set, the targets generate the display hooks
    display: Final[bool]

    #: Description of the enumeration, if any
    description: Final[Optional[Description]]

    #: Relation to the parsed enumeration
    parsed: Final[parse.Enumeration]

    #: Catalogue derived from the binding table
    catalogue: Final[Catalogue]

    #: Map literals by their identifiers
    literals_by_name: Final[Mapping[str, EnumerationLiteral]]

    #: Map literals by their tokens
    literals_by_value: Final[Mapping[str, EnumerationLiteral]]

    #: Collect IDs (with :py:func:`id`) of the literal objects in a set
    literal_id_set: Final[FrozenSet[int]]

    # fmt: off
    @require(lambda literals: len(literals) > 0)
    @require(
        lambda literals: (
            tokens := [literal.value for literal in literals],
            len(tokens) == len(set(tokens))
        )[1],
        "Tokens unique; this should have been caught as an Error before"
    )
    # fmt: on
    def __init__(
        self,
        name: Identifier,
        literals: Sequence[EnumerationLiteral],
        methods: Sequence[ImplementationSpecificMethod],
        display: bool,
        description: Optional[Description],
        parsed: parse.Enumeration,
    ) -> None:
        self.name = name
        self.literals = literals
        self.methods = methods
        self.display = display
        self.description = description
        self.parsed = parsed

        self.catalogue = Catalogue(literals=literals)

        self.literals_by_name = {literal.name: literal for literal in self.literals}

        self.literals_by_value = {literal.value: literal for literal in self.literals}

        self.literal_id_set = frozenset(id(literal) for literal in literals)

    @require(lambda self, literal: id(literal) in self.literal_id_set)
    def token_of(self, literal: EnumerationLiteral) -> str:
        """Return the token bound to the ``literal``."""
        return literal.value

    @ensure(lambda text, result: result is None or result.value == text)
    def parse_token(self, text: str) -> Optional[EnumerationLiteral]:
        """
        Find the literal whose token equals exactly the ``text``.

        The catalogue is scanned in the order of the binding table so that the
        first match wins.

        :return: the literal, or ``None`` if ``text`` is not a token
        """
        for literal, token in zip(self.catalogue.variants, self.catalogue.tokens):
            if token == text:
                return literal

        return None

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


class SymbolTable:
    """Represent all the symbols of the intermediate representation."""

    #: List of all the enumerations in the order of declaration
    enumerations: Final[Sequence[Enumeration]]

    #: Additional information about the source binding model
    meta_model: Final[MetaModel]

    _name_to_enumeration: Final[Mapping[Identifier, Enumeration]]

    # fmt: off
    @require(
        lambda enumerations: (
            names := [enumeration.name for enumeration in enumerations],
            len(names) == len(set(names)),
        )[1],
        "Names of the enumerations unique",
    )
    @ensure(
        lambda self:
        all(
            self.must_find_enumeration(enumeration.name) is enumeration
            for enumeration in self.enumerations
        )
    )
    # fmt: on
    def __init__(
        self,
        enumerations: Sequence[Enumeration],
        meta_model: MetaModel,
    ) -> None:
        self.enumerations = enumerations
        self.meta_model = meta_model

        self._name_to_enumeration = {
            enumeration.name: enumeration for enumeration in enumerations
        }

    def find_enumeration(self, name: Identifier) -> Optional[Enumeration]:
        """Find the enumeration with the given ``name``."""
        return self._name_to_enumeration.get(name, None)

    def must_find_enumeration(self, name: Identifier) -> Enumeration:
        """
        Find the enumeration with the given ``name``.

        :raise: :py:class:`KeyError` if it does not exist.
        """
        enumeration = self._name_to_enumeration.get(name, None)
        if enumeration is None:
            raise KeyError(name)

        return enumeration
