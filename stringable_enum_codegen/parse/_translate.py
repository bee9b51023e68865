"""Translate the abstract syntax tree of the binding model into parsed structures."""
import ast
import collections
import enum
import io
import textwrap
from typing import (
    List,
    Any,
    Optional,
    Tuple,
    Mapping,
    MutableMapping,
)

import asttokens
import docutils.core
import docutils.nodes
from icontract import ensure, require

from stringable_enum_codegen.common import (
    Error,
    Identifier,
    LinenoColumner,
)
from stringable_enum_codegen.parse._types import (
    Description,
    Enumeration,
    EnumerationLiteral,
    ImplementationSpecificMethod,
    is_string_expr,
    MetaModel,
    SymbolTable,
    UnverifiedSymbolTable,
)


# noinspection GrazieInspection
@ensure(lambda result: (result[0] is None) ^ (result[1] is None))
def source_to_atok(
    source: str,
) -> Tuple[Optional[asttokens.ASTTokens], Optional[Exception]]:
    """
    Parse the Python code.

    :param source: Python code as text
    :return: parsed module or error, if any
    """
    try:
        atok = asttokens.ASTTokens(source, parse=True)
    except Exception as error:
        return None, error

    return atok, None


class _ExpectedImportsVisitor(ast.NodeVisitor):
    # pylint: disable=missing-docstring

    def __init__(self) -> None:
        self.errors = []  # type: List[Error]

    def visit_Import(self, node: ast.Import) -> Any:
        self.errors.append(
            Error(
                node,
                "Unexpected ``import ...``. "
                "Only ``from ... import...`` statements are expected.",
            )
        )

    _EXPECTED_NAME_FROM_MODULE = collections.OrderedDict(
        [
            ("Enum", "enum"),
            ("implementation_specific", "stringable_enum_codegen.marker"),
            ("no_display", "stringable_enum_codegen.marker"),
        ]
    )

    # noinspection PyTypeChecker
    def visit_ImportFrom(self, node: ast.ImportFrom) -> Any:
        for name in node.names:
            assert isinstance(name, ast.alias)
            if name.asname is not None:
                self.errors.append(
                    Error(
                        name,
                        "Unexpected ``from ... import ... as ...``. "
                        "Only ``from ... import...`` statements are expected.",
                    )
                )
            else:
                if name.name not in self._EXPECTED_NAME_FROM_MODULE:
                    self.errors.append(
                        Error(name, f"Unexpected import of a name {name.name!r}.")
                    )

                else:
                    expected_module = self._EXPECTED_NAME_FROM_MODULE[name.name]
                    if expected_module != node.module:
                        self.errors.append(
                            Error(
                                name,
                                f"Expected to import {name.name!r} "
                                f"from the module {expected_module}, "
                                f"but it is imported from {node.module}.",
                            )
                        )


def check_expected_imports(atok: asttokens.ASTTokens) -> List[str]:
    """
    Check that only expected imports are stated in the module.

    This is important so that we can interpret the markers and the base classes
    without executing the model.

    Return errors, if any.
    """
    visitor = _ExpectedImportsVisitor()
    assert atok.tree is not None
    visitor.visit(atok.tree)

    if len(visitor.errors) == 0:
        return []

    lineno_columner = LinenoColumner(atok=atok)
    return [lineno_columner.error_message(error) for error in visitor.errors]


@require(lambda constant: isinstance(constant.value, str))
@ensure(lambda result: (result[0] is None) ^ (result[1] is None))
def _ast_constant_string_to_description(
    constant: ast.Constant,
) -> Tuple[Optional[Description], Optional[Error]]:
    """Extract the docstring from the given string constant."""
    text = constant.value
    assert isinstance(
        text, str
    ), f"Expected a string constant node, but got: {ast.dump(constant)!r}"

    dedented = textwrap.dedent(text)

    warnings = io.StringIO()
    # noinspection PyUnusedLocal
    document = None  # type: Optional[docutils.nodes.document]
    try:
        document = docutils.core.publish_doctree(
            dedented, settings_overrides={"warning_stream": warnings}
        )
    except Exception as err:
        return None, Error(
            constant, f"Failed to parse the description with docutils: {err}"
        )

    warnings_text = warnings.getvalue()
    if warnings_text:
        return None, Error(
            constant,
            f"Failed to parse the description with docutils:\n"
            f"{warnings_text.strip()}\n\n"
            f"The original text was: {dedented!r}",
        )

    assert document is not None

    return Description(document=document, node=constant), None


class _ClassMarker(enum.Enum):
    NO_DISPLAY = "no_display"


_CLASS_MARKER_FROM_STRING: Mapping[str, _ClassMarker] = {
    marker.value: marker for marker in _ClassMarker
}


@ensure(lambda result: (result[0] is not None) ^ (result[1] is not None))
def _class_decorator_to_marker(
    decorator: ast.AST,
) -> Tuple[Optional[_ClassMarker], Optional[Error]]:
    """Parse a simple decorator as a class marker."""
    if not isinstance(decorator, ast.Name):
        return None, Error(
            decorator,
            f"Expected only simple markers as decorators of an enumeration, "
            f"but got: {ast.dump(decorator)}",
        )

    class_marker = _CLASS_MARKER_FROM_STRING.get(decorator.id, None)

    if class_marker is None:
        return (
            None,
            Error(
                decorator,
                f"The handling of the marker has not been "
                f"implemented: {decorator.id!r}",
            ),
        )

    return class_marker, None


# noinspection PyTypeChecker
@ensure(lambda result: (result[0] is None) ^ (result[1] is None))
def _function_def_to_method(
    node: ast.FunctionDef,
) -> Tuple[Optional[ImplementationSpecificMethod], Optional[Error]]:
    """Interpret a method of an enumeration as an implementation-specific one."""
    if (
        len(node.decorator_list) != 1
        or not isinstance(node.decorator_list[0], ast.Name)
        or node.decorator_list[0].id != "implementation_specific"
    ):
        return None, Error(
            node,
            f"Expected the method {node.name!r} to be decorated only with "
            f"``@implementation_specific`` since methods of an enumeration "
            f"are always implemented by snippets",
        )

    if node.name.startswith("_"):
        return None, Error(
            node,
            f"Unexpected protected or private method {node.name!r}; "
            f"only public methods can be injected",
        )

    if len(node.args.args) == 0 or node.args.args[0].arg != "self":
        return None, Error(
            node,
            f"Expected the first argument of the method {node.name!r} "
            f"to be ``self``",
        )

    description = None  # type: Optional[Description]

    for i, body_node in enumerate(node.body):
        if i == 0 and is_string_expr(body_node):
            assert isinstance(body_node, ast.Expr)
            assert isinstance(body_node.value, ast.Constant)
            description, error = _ast_constant_string_to_description(body_node.value)
            if error is not None:
                return None, error

        elif isinstance(body_node, ast.Pass) or (
            isinstance(body_node, ast.Expr)
            and isinstance(body_node.value, ast.Constant)
            and body_node.value.value is Ellipsis
        ):
            pass

        else:
            return None, Error(
                body_node,
                f"Expected only a docstring and ``...`` or ``pass`` "
                f"in the body of the implementation-specific method {node.name!r}",
            )

    return (
        ImplementationSpecificMethod(
            name=Identifier(node.name), description=description, node=node
        ),
        None,
    )


# noinspection PyTypeChecker
@ensure(lambda result: (result[0] is None) ^ (result[1] is None))
def _assign_to_enumeration_literal(
    assign: ast.Assign, atok: asttokens.ASTTokens
) -> Tuple[Optional[Tuple[Identifier, str]], Optional[Error]]:
    """Interpret the assignment as a binding of a variant to its token."""
    if len(assign.targets) != 1:
        return (
            None,
            Error(
                assign,
                f"Expected a single target in the assignment, "
                f"but got: {len(assign.targets)}",
            ),
        )

    target = assign.targets[0]
    if not isinstance(target, ast.Name):
        return (
            None,
            Error(
                target,
                f"Expected a name as a target of the assignment, "
                f"but got: {atok.get_text(target)}",
            ),
        )

    if target.id.startswith("_"):
        return (
            None,
            Error(
                target,
                f"Expected a variant name without a leading underscore, "
                f"but got: {target.id!r}",
            ),
        )

    if not isinstance(assign.value, ast.Constant):
        return (
            None,
            Error(
                assign.value,
                f"Expected a constant in the enumeration assignment, "
                f"but got: {atok.get_text(assign.value)}",
            ),
        )

    if not isinstance(assign.value.value, str):
        return (
            None,
            Error(
                assign.value,
                f"Expected a string literal as the token of the variant "
                f"{target.id!r}, but got: {assign.value.value!r}",
            ),
        )

    return (Identifier(target.id), assign.value.value), None


# noinspection PyTypeChecker,PyUnresolvedReferences
@ensure(lambda result: (result[0] is None) ^ (result[1] is None))
def _classdef_to_enumeration(
    node: ast.ClassDef, atok: asttokens.ASTTokens
) -> Tuple[Optional[Enumeration], Optional[Error]]:
    """Interpret a class which defines an enumeration and its bindings."""
    if (
        len(node.bases) != 1
        or not isinstance(node.bases[0], ast.Name)
        or node.bases[0].id != "Enum"
        or len(node.keywords) > 0
    ):
        return None, Error(
            node,
            f"Expected the class {node.name!r} to inherit only from ``Enum``; "
            f"only enumerations are expected in the binding model",
        )

    display = True
    for decorator_node in node.decorator_list:
        marker, error = _class_decorator_to_marker(decorator=decorator_node)
        if error is not None:
            return None, error

        assert marker is not None

        if marker is _ClassMarker.NO_DISPLAY:
            display = False
        else:
            raise AssertionError(f"Unhandled class marker: {marker}")

    literals = []  # type: List[EnumerationLiteral]
    methods = []  # type: List[ImplementationSpecificMethod]

    literals_by_name = dict()  # type: MutableMapping[Identifier, EnumerationLiteral]
    methods_by_name = dict()  # type: MutableMapping[Identifier, ImplementationSpecificMethod]

    description = None  # type: Optional[Description]

    cursor = 0
    while cursor < len(node.body):
        old_cursor = cursor

        body_node = node.body[cursor]  # type: ast.AST

        if cursor == 0 and is_string_expr(body_node):
            assert isinstance(body_node, ast.Expr)
            assert isinstance(body_node.value, ast.Constant)
            description, error = _ast_constant_string_to_description(body_node.value)
            if error is not None:
                return None, error

            cursor += 1

        elif isinstance(body_node, ast.Pass):
            cursor += 1

        elif isinstance(body_node, ast.Assign):
            name_and_value, error = _assign_to_enumeration_literal(
                assign=body_node, atok=atok
            )
            if error is not None:
                return None, error

            assert name_and_value is not None
            literal_name, literal_value = name_and_value

            literal_description = None  # type: Optional[Description]
            next_expr = node.body[cursor + 1] if cursor < len(node.body) - 1 else None

            if next_expr is not None and is_string_expr(next_expr):
                assert isinstance(next_expr, ast.Expr)
                assert isinstance(next_expr.value, ast.Constant)
                literal_description, error = _ast_constant_string_to_description(
                    next_expr.value
                )

                if error is not None:
                    return None, error

                cursor += 1

            if literal_name in literals_by_name:
                return None, Error(
                    body_node,
                    f"The variant {literal_name!r} has been already bound "
                    f"in the enumeration {node.name!r}; every variant must be "
                    f"bound exactly once",
                )

            literal = EnumerationLiteral(
                name=literal_name,
                value=literal_value,
                description=literal_description,
                node=body_node,
            )
            literals.append(literal)
            literals_by_name[literal_name] = literal

            cursor += 1

        elif isinstance(body_node, ast.FunctionDef):
            method, error = _function_def_to_method(node=body_node)
            if error is not None:
                return None, error

            assert method is not None

            if method.name in methods_by_name:
                return None, Error(
                    body_node,
                    f"The method {method.name!r} has been already declared "
                    f"in the enumeration {node.name!r}",
                )

            methods.append(method)
            methods_by_name[method.name] = method

            cursor += 1

        else:
            return (
                None,
                Error(
                    node.body[cursor],
                    f"Expected either a docstring at the beginning, an assignment "
                    f"or an implementation-specific method in an enumeration, "
                    f"but got an unexpected body element at index {cursor} "
                    f"of the class definition {node.name!r}: "
                    f"{atok.get_text(node.body[cursor])}",
                ),
            )

        assert cursor > old_cursor, f"Loop invariant: {cursor=}, {old_cursor=}"

    for method in methods:
        if method.name in literals_by_name:
            return None, Error(
                method.node,
                f"The method {method.name!r} conflicts with a variant "
                f"of the same name in the enumeration {node.name!r}",
            )

    return (
        Enumeration(
            name=Identifier(node.name),
            literals=literals,
            methods=methods,
            display=display,
            description=description,
            node=node,
        ),
        None,
    )


@ensure(lambda result: (result[0] is not None) ^ (result[1] is not None))
def _verify_symbol_table(
    symbol_table: UnverifiedSymbolTable,
) -> Tuple[Optional[SymbolTable], Optional[List[Error]]]:
    """
    Check that the symbol table is consistent.

    For example, check that the names of the enumerations are unique.
    """
    errors = []  # type: List[Error]

    observed = dict()  # type: MutableMapping[Identifier, Enumeration]
    for enumeration in symbol_table.enumerations:
        if not enumeration.name[0].isupper():
            errors.append(
                Error(
                    enumeration.node,
                    f"Expected the name of the enumeration to start "
                    f"with a capital letter, but got: {enumeration.name!r}",
                )
            )

        if enumeration.name in observed:
            errors.append(
                Error(
                    enumeration.node,
                    f"The enumeration with the name {enumeration.name!r} conflicts "
                    f"with another enumeration with the same name.",
                )
            )
        else:
            observed[enumeration.name] = enumeration

    if len(errors) > 0:
        return None, errors

    return SymbolTable(symbol_table), None


# noinspection PyTypeChecker
@ensure(lambda result: (result[0] is None) ^ (result[1] is None))
def _atok_to_symbol_table(
    atok: asttokens.ASTTokens,
) -> Tuple[Optional[SymbolTable], Optional[Error]]:
    enumerations = []  # type: List[Enumeration]
    underlying_errors = []  # type: List[Error]

    description = None  # type: Optional[Description]

    # region Parse

    assert atok.tree is not None
    assert isinstance(atok.tree, ast.Module)

    for i, node in enumerate(atok.tree.body):
        if isinstance(node, ast.Pass):
            continue

        if isinstance(node, ast.ClassDef):
            enumeration, error = _classdef_to_enumeration(node=node, atok=atok)
            if error is not None:
                underlying_errors.append(
                    Error(
                        node,
                        f"Failed to parse the class definition: {node.name}",
                        [error],
                    )
                )
            else:
                assert enumeration is not None
                enumerations.append(enumeration)

        elif i == 0 and is_string_expr(node):
            assert isinstance(node, ast.Expr)
            assert isinstance(node.value, ast.Constant)

            # The first string literal is assumed to be the docstring of the model.
            description, description_error = _ast_constant_string_to_description(
                constant=node.value
            )

            if description_error is not None:
                underlying_errors.append(description_error)

        elif isinstance(node, ast.ImportFrom):
            # The imports have been already checked in ``check_expected_imports``.
            pass

        else:
            underlying_errors.append(
                Error(
                    node,
                    f"We do not know how to interpret the statement in "
                    f"the binding model: {atok.get_text(node)}",
                )
            )

    if len(underlying_errors) > 0:
        return None, Error(None, "Failed to parse the binding model", underlying_errors)

    # endregion

    unverified_symbol_table = UnverifiedSymbolTable(
        enumerations=enumerations,
        meta_model=MetaModel(description=description),
    )

    symbol_table, verification_errors = _verify_symbol_table(unverified_symbol_table)

    if verification_errors is not None:
        return (
            None,
            Error(
                atok.tree,
                "Verification of the binding model failed",
                verification_errors,
            ),
        )

    assert symbol_table is not None
    return symbol_table, None


@require(lambda atok: isinstance(atok.tree, ast.Module))
@ensure(lambda result: (result[0] is None) ^ (result[1] is None))
def atok_to_symbol_table(
    atok: asttokens.ASTTokens,
) -> Tuple[Optional[SymbolTable], Optional[Error]]:
    """Construct the symbol table based on the parsed AST."""
    return _atok_to_symbol_table(atok=atok)
