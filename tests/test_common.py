# pylint: disable=missing-module-docstring
# pylint: disable=missing-class-docstring
# pylint: disable=missing-function-docstring

import ast
import textwrap
import unittest

import icontract

from stringable_enum_codegen.common import (
    Error,
    Identifier,
    LinenoColumner,
    Stripped,
)

import tests.common


class Test_identifier(unittest.TestCase):
    def test_valid(self) -> None:
        self.assertEqual("Log_level", Identifier("Log_level"))

    def test_invalid(self) -> None:
        with self.assertRaises(icontract.ViolationError):
            Identifier("log-level")


class Test_stripped(unittest.TestCase):
    def test_valid(self) -> None:
        self.assertEqual("some\ntext", Stripped("some\ntext"))

    def test_invalid(self) -> None:
        with self.assertRaises(icontract.ViolationError):
            Stripped("  text")

        with self.assertRaises(icontract.ViolationError):
            Stripped("text\n")


class Test_lineno_columner(unittest.TestCase):
    def test_message_with_node(self) -> None:
        atok = tests.common.must_source_to_atok(
            textwrap.dedent(
                """\
                class Color(Enum):
                    Red = 1
                """
            )
        )

        assert isinstance(atok.tree, ast.Module)
        class_def = atok.tree.body[0]
        assert isinstance(class_def, ast.ClassDef)
        assign = class_def.body[0]

        lineno_columner = LinenoColumner(atok=atok)
        message = lineno_columner.error_message(
            Error(class_def, "Outer", [Error(assign, "Inner")])
        )

        self.assertEqual(
            "At line 1 and column 1: Outer\n  At line 2 and column 5: Inner",
            message,
        )

    def test_message_without_node(self) -> None:
        atok = tests.common.must_source_to_atok("pass\n")
        lineno_columner = LinenoColumner(atok=atok)

        self.assertEqual(
            "Something went wrong",
            lineno_columner.error_message(Error(None, "Something went wrong")),
        )


if __name__ == "__main__":
    unittest.main()
