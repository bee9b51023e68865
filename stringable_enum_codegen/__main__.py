"""Run stringable-enum-codegen as Python module."""

import sys

import stringable_enum_codegen.main

if __name__ == "__main__":
    # The ``prog`` needs to be set in the argparse.
    # Otherwise the program name in the help shown to the user will be ``__main__``.
    sys.exit(stringable_enum_codegen.main.main(prog="stringable_enum_codegen"))
