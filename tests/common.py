"""Provide common functionality across different tests."""
import importlib.util
import itertools
import os
import pathlib
import tempfile
from types import ModuleType
from typing import List, Tuple, Optional, Union, Sequence, Mapping

import asttokens
from icontract import ensure

from stringable_enum_codegen import parse, intermediate, specific_implementations
from stringable_enum_codegen.common import Error, Stripped, LinenoColumner
from stringable_enum_codegen.python import structure as python_structure


# pylint: disable=missing-function-docstring

#: Directory with the test binding models and snippets
TEST_DATA_DIR = pathlib.Path(os.path.realpath(__file__)).parent.parent / "test_data"


def most_underlying_messages(error_or_errors: Union[Error, Sequence[Error]]) -> str:
    """Find the "leaf" errors and render them as a new-line separated list."""
    if isinstance(error_or_errors, Error):
        errors = [error_or_errors]  # type: Sequence[Error]
    else:
        errors = error_or_errors

    most_underlying_errors = []  # type: List[Error]

    for error in errors:
        if error.underlying is None or len(error.underlying) == 0:
            most_underlying_errors.append(error)
            continue

        stack = list(reversed(error.underlying))  # type: List[Error]

        while len(stack) > 0:
            top_error = stack.pop()

            if top_error.underlying is None or len(top_error.underlying) == 0:
                most_underlying_errors.append(top_error)
            else:
                stack.extend(reversed(top_error.underlying))

    return "\n".join(
        most_underlying_error.message
        for most_underlying_error in most_underlying_errors
    )


@ensure(lambda result: (result[0] is not None) ^ (result[1] is not None))
def parse_atok(
    atok: asttokens.ASTTokens,
) -> Tuple[Optional[parse.SymbolTable], Optional[Error]]:
    """Parse the ``atok``, an abstract syntax tree of a binding model."""
    import_errors = parse.check_expected_imports(atok=atok)
    if len(import_errors) > 0:
        import_errors_str = "\n".join(
            f"* {import_error}" for import_error in import_errors
        )

        raise AssertionError(
            f"Unexpected imports in the source code:\n{import_errors_str}"
        )

    symbol_table, error = parse.atok_to_symbol_table(atok=atok)
    return symbol_table, error


def must_source_to_atok(source: str) -> asttokens.ASTTokens:
    atok, parse_exception = parse.source_to_atok(source=source)
    if parse_exception:
        raise parse_exception  # pylint: disable=raising-bad-type

    assert atok is not None
    return atok


@ensure(lambda result: (result[0] is not None) ^ (result[1] is not None))
def parse_source(source: str) -> Tuple[Optional[parse.SymbolTable], Optional[Error]]:
    """Parse the given source text into a symbol table."""
    return parse_atok(atok=must_source_to_atok(source))


@ensure(lambda result: (result[0] is not None) ^ (result[1] is not None))
def translate_source_to_intermediate(
    source: str,
) -> Tuple[Optional[intermediate.SymbolTable], Optional[Error]]:
    atok = must_source_to_atok(source)

    parsed_symbol_table, error = parse_atok(atok=atok)
    assert error is None, f"{most_underlying_messages(error)}"
    assert parsed_symbol_table is not None

    return intermediate.translate(parsed_symbol_table=parsed_symbol_table, atok=atok)


def must_translate_source_to_intermediate(
    source: str,
) -> intermediate.SymbolTable:
    symbol_table, error = translate_source_to_intermediate(source=source)
    assert (
        error is None
    ), f"Unexpected error when parsing the source: {most_underlying_messages(error)}"
    assert symbol_table is not None
    return symbol_table


def must_generate_python_code(
    source: str,
    spec_impls: Optional[Mapping[str, str]] = None,
) -> str:
    """Generate the Python module from the binding model given as ``source``."""
    symbol_table = must_translate_source_to_intermediate(source=source)

    verified, errors = python_structure.verify(symbol_table=symbol_table)
    assert errors is None, f"{most_underlying_messages(errors)}"
    assert verified is not None

    spec_impls_mapping = {
        specific_implementations.ImplementationKey(key): Stripped(value.strip())
        for key, value in (spec_impls or dict()).items()
    }  # type: specific_implementations.SpecificImplementations

    code, errors = python_structure.generate(
        symbol_table=verified, spec_impls=spec_impls_mapping
    )

    if errors is not None:
        lineno_columner = LinenoColumner(atok=must_source_to_atok(source))
        raise AssertionError(
            "\n".join(lineno_columner.error_message(error) for error in errors)
        )

    assert code is not None
    return code


_MODULE_COUNTER = itertools.count()


def import_module_from_path(path: pathlib.Path) -> ModuleType:
    """Import the module at ``path`` under a unique name."""
    module_name = f"generated_by_tests_{next(_MODULE_COUNTER)}"
    spec = importlib.util.spec_from_file_location(module_name, str(path))
    assert spec is not None
    assert spec.loader is not None

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def generate_and_import(
    source: str,
    spec_impls: Optional[Mapping[str, str]] = None,
) -> ModuleType:
    """Generate the Python module from ``source`` and import it."""
    code = must_generate_python_code(source=source, spec_impls=spec_impls)

    with tempfile.TemporaryDirectory() as tmp_dir:
        pth = pathlib.Path(tmp_dir) / "enums.py"
        pth.write_text(code, encoding="utf-8")
        return import_module_from_path(pth)
