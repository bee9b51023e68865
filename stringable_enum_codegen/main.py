"""Generate string bindings of enumerations based on a binding model."""

import argparse
import enum
import pathlib
import sys
from typing import TextIO, Optional, Sequence

import stringable_enum_codegen
import stringable_enum_codegen.jsonschema.main as jsonschema_main
import stringable_enum_codegen.python.main as python_main
from stringable_enum_codegen import run, specific_implementations
from stringable_enum_codegen.common import LinenoColumner, assert_never

assert stringable_enum_codegen.__doc__ == __doc__


class Target(enum.Enum):
    """List available target implementations."""

    JSONSCHEMA = "jsonschema"
    PYTHON = "python"


class Parameters:
    """Represent the program parameters."""

    def __init__(
        self,
        model_path: pathlib.Path,
        target: Target,
        snippets_dir: Optional[pathlib.Path],
        output_dir: pathlib.Path,
    ) -> None:
        """Initialize with the given values."""
        self.model_path = model_path
        self.target = target
        self.snippets_dir = snippets_dir
        self.output_dir = output_dir


def execute(params: Parameters, stdout: TextIO, stderr: TextIO) -> int:
    """Run the program."""
    # region Basic checks
    if not params.model_path.exists():
        stderr.write(f"The --model_path does not exist: {params.model_path}\n")
        return 1

    if not params.model_path.is_file():
        stderr.write(
            f"The --model_path does not point to a file: {params.model_path}\n"
        )
        return 1

    if params.snippets_dir is not None:
        if not params.snippets_dir.exists():
            stderr.write(f"The --snippets_dir does not exist: {params.snippets_dir}\n")
            return 1

        if not params.snippets_dir.is_dir():
            stderr.write(
                f"The --snippets_dir does not point to a directory: "
                f"{params.snippets_dir}\n"
            )
            return 1

    if not params.output_dir.exists():
        params.output_dir.mkdir(parents=True, exist_ok=True)
    else:
        if not params.output_dir.is_dir():
            stderr.write(
                f"The --output_dir does not point to a directory: "
                f"{params.output_dir}\n"
            )
            return 1

    # endregion

    # region Parse and understand

    spec_impls = dict()  # type: specific_implementations.SpecificImplementations

    if params.snippets_dir is not None:
        read_spec_impls, spec_impls_errors = specific_implementations.read_from_directory(
            snippets_dir=params.snippets_dir
        )

        if spec_impls_errors:
            run.write_error_report(
                message="Failed to resolve the implementation-specific snippets",
                errors=spec_impls_errors,
                stderr=stderr,
            )
            return 1

        assert read_spec_impls is not None
        spec_impls = read_spec_impls

    symbol_table_atok, error_message = run.load_model(model_path=params.model_path)
    if error_message is not None:
        stderr.write(error_message)
        return 1
    assert symbol_table_atok is not None

    ir_symbol_table, atok = symbol_table_atok

    # endregion

    # region Dispatch

    lineno_columner = LinenoColumner(atok=atok)

    run_context = run.Context(
        model_path=params.model_path,
        symbol_table=ir_symbol_table,
        spec_impls=spec_impls,
        lineno_columner=lineno_columner,
        output_dir=params.output_dir,
    )

    if params.target is Target.JSONSCHEMA:
        return jsonschema_main.execute(
            context=run_context, stdout=stdout, stderr=stderr
        )

    elif params.target is Target.PYTHON:
        return python_main.execute(context=run_context, stdout=stdout, stderr=stderr)

    else:
        assert_never(params.target)

    # endregion

    raise AssertionError("Unexpected execution path")


def main(prog: str, argv: Optional[Sequence[str]] = None) -> int:
    """
    Execute the main routine.

    :param prog: name of the program to be displayed in the help
    :param argv: command-line arguments; if not given, :py:data:`sys.argv` is used
    :return: exit code
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = argparse.ArgumentParser(prog=prog, description=__doc__)
    parser.add_argument("--model_path", help="path to the binding model", required=True)
    parser.add_argument(
        "--snippets_dir",
        help="path to the directory containing implementation-specific code snippets",
    )
    parser.add_argument(
        "--output_dir", help="path to the generated code", required=True
    )
    parser.add_argument(
        "--target",
        help="target language or schema",
        required=True,
        choices=[literal.value for literal in Target],
    )
    parser.add_argument(
        "--version", help="show the current version and exit", action="store_true"
    )

    # The module ``argparse`` does not understand special options such as
    # ``--version``, so we hard-wire it.
    if "--version" in argv and "--help" not in argv:
        print(stringable_enum_codegen.__version__)
        return 0

    args = parser.parse_args(argv)

    target_to_str = {literal.value: literal for literal in Target}

    params = Parameters(
        model_path=pathlib.Path(args.model_path),
        target=target_to_str[args.target],
        snippets_dir=(
            pathlib.Path(args.snippets_dir) if args.snippets_dir is not None else None
        ),
        output_dir=pathlib.Path(args.output_dir),
    )

    return execute(params=params, stdout=sys.stdout, stderr=sys.stderr)


def entry_point() -> int:
    """Provide an entry point for a console script."""
    return main(prog="stringable-enum-codegen")


if __name__ == "__main__":
    sys.exit(main(prog="stringable-enum-codegen"))
