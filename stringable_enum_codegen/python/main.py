"""Generate the Python module with the string bindings of the enumerations."""
import pathlib

from typing import TextIO

from stringable_enum_codegen import run
from stringable_enum_codegen.python import structure as python_structure


def execute(context: run.Context, stdout: TextIO, stderr: TextIO) -> int:
    """Generate the code."""
    verified_ir_table, errors = python_structure.verify(
        symbol_table=context.symbol_table
    )

    if errors is not None:
        run.write_error_report(
            message=f"Failed to verify the intermediate symbol table "
            f"for generation of Python code "
            f"based on {context.model_path}",
            errors=[context.lineno_columner.error_message(error) for error in errors],
            stderr=stderr,
        )
        return 1

    assert verified_ir_table is not None

    code, errors = python_structure.generate(
        symbol_table=verified_ir_table, spec_impls=context.spec_impls
    )

    rel_path = pathlib.Path("enums.py")

    if errors is not None:
        run.write_error_report(
            message=f"Failed to generate {rel_path} based on {context.model_path}",
            errors=[context.lineno_columner.error_message(error) for error in errors],
            stderr=stderr,
        )
        return 1

    assert code is not None

    pth = context.output_dir / rel_path
    try:
        pth.write_text(code, encoding="utf-8")
    except Exception as exception:
        run.write_error_report(
            message=f"Failed to write to {pth}", errors=[str(exception)], stderr=stderr
        )
        return 1

    stdout.write(f"Code generated to: {context.output_dir}\n")
    return 0
