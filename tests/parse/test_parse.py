# pylint: disable=missing-module-docstring
# pylint: disable=missing-class-docstring
# pylint: disable=missing-function-docstring

import re
import textwrap
import unittest
from typing import List

from stringable_enum_codegen import parse
from stringable_enum_codegen.common import Identifier

import tests.common


class Test_parsing_AST(unittest.TestCase):
    def test_valid_code(self) -> None:
        source = textwrap.dedent(
            """\
            class Something(Enum):
                pass
            """
        )

        atok, error = parse.source_to_atok(source=source)
        assert atok is not None
        assert error is None

    def test_invalid_code(self) -> None:
        source = textwrap.dedent(
            """\
            class Something(Enum): 12 this is wrong
            """
        )

        _, error = parse.source_to_atok(source=source)
        assert error is not None
        assert isinstance(error, SyntaxError)
        self.assertEqual(1, error.lineno)


class Test_checking_imports(unittest.TestCase):
    @staticmethod
    def replace_column_number_with_x(errors: List[str]) -> List[str]:
        """Replace the column number with ``"X"`` as it changes between Pythons."""
        return [re.sub(r"column [0-9]+", "column X", error) for error in errors]

    def check_errors(self, source: str, expected: List[str]) -> None:
        atok, error = parse.source_to_atok(source=source)
        assert error is None, f"{error=}"
        assert atok is not None

        errors = parse.check_expected_imports(atok=atok)
        self.assertListEqual(
            expected, Test_checking_imports.replace_column_number_with_x(errors)
        )

    def test_import_reported(self) -> None:
        self.check_errors(
            source="import typing\n",
            expected=[
                "At line 1 and column X: "
                "Unexpected ``import ...``. "
                "Only ``from ... import...`` statements are expected."
            ],
        )

    def test_import_as_reported(self) -> None:
        self.check_errors(
            source="from enum import Enum as E\n",
            expected=[
                "At line 1 and column X: "
                "Unexpected ``from ... import ... as ...``. "
                "Only ``from ... import...`` statements are expected."
            ],
        )

    def test_unexpected_name_reported(self) -> None:
        self.check_errors(
            source="from enum import IntEnum\n",
            expected=["At line 1 and column X: Unexpected import of a name 'IntEnum'."],
        )

    def test_name_from_unexpected_module_reported(self) -> None:
        self.check_errors(
            source="from something import no_display\n",
            expected=[
                "At line 1 and column X: "
                "Expected to import 'no_display' "
                "from the module stringable_enum_codegen.marker, "
                "but it is imported from something."
            ],
        )

    def test_expected_imports(self) -> None:
        self.check_errors(
            source=textwrap.dedent(
                """\
                from enum import Enum

                from stringable_enum_codegen.marker import (
                    implementation_specific,
                    no_display,
                )
                """
            ),
            expected=[],
        )


class Test_parsing_enumerations(unittest.TestCase):
    def test_bindings_in_order(self) -> None:
        source = textwrap.dedent(
            '''\
            """Provide the enumerations of our tool."""


            class Color(Enum):
                """Define when to colorize the output."""

                Always = "always"
                """Colorize even if the output is redirected."""

                Never = "never"
                Auto = "auto"
            '''
        )

        symbol_table, error = tests.common.parse_source(source)
        assert error is None, f"{tests.common.most_underlying_messages(error)}"
        assert symbol_table is not None

        assert symbol_table.meta_model.description is not None
        self.assertEqual(
            "Provide the enumerations of our tool.",
            symbol_table.meta_model.description.text,
        )

        enumeration = symbol_table.must_find_enumeration(Identifier("Color"))
        self.assertTrue(enumeration.display)

        self.assertListEqual(
            [("Always", "always"), ("Never", "never"), ("Auto", "auto")],
            [(literal.name, literal.value) for literal in enumeration.literals],
        )

        always = enumeration.literals_by_name[Identifier("Always")]
        assert always.description is not None
        self.assertEqual(
            "Colorize even if the output is redirected.", always.description.text
        )

        self.assertIsNone(enumeration.literals[1].description)

    def test_no_display(self) -> None:
        source = textwrap.dedent(
            """\
            @no_display
            class Line_ending(Enum):
                LF = "lf"
                CRLF = "crlf"
            """
        )

        symbol_table, error = tests.common.parse_source(source)
        assert error is None, f"{tests.common.most_underlying_messages(error)}"
        assert symbol_table is not None

        self.assertFalse(symbol_table.enumerations[0].display)

    def test_implementation_specific_method(self) -> None:
        source = textwrap.dedent(
            '''\
            class Color(Enum):
                Always = "always"

                @implementation_specific
                def detect(self, stream) -> bool:
                    """Decide whether to colorize the ``stream``."""
                    ...
            '''
        )

        symbol_table, error = tests.common.parse_source(source)
        assert error is None, f"{tests.common.most_underlying_messages(error)}"
        assert symbol_table is not None

        methods = symbol_table.enumerations[0].methods
        self.assertListEqual(["detect"], [method.name for method in methods])

        assert methods[0].description is not None
        self.assertEqual(
            "Decide whether to colorize the ``stream``.", methods[0].description.text
        )

    def test_empty_enumeration_is_parsed(self) -> None:
        # Completeness is checked by the translation to the intermediate layer.
        source = textwrap.dedent(
            """\
            class Nothing(Enum):
                pass
            """
        )

        symbol_table, error = tests.common.parse_source(source)
        assert error is None, f"{tests.common.most_underlying_messages(error)}"
        assert symbol_table is not None

        self.assertEqual(0, len(symbol_table.enumerations[0].literals))


class Test_parsing_errors(unittest.TestCase):
    def check_error(self, source: str, expected: str) -> None:
        symbol_table, error = tests.common.parse_source(textwrap.dedent(source))
        self.assertIsNone(symbol_table)
        assert error is not None

        self.assertEqual(expected, tests.common.most_underlying_messages(error))

    def test_not_an_enumeration(self) -> None:
        self.check_error(
            """\
            class Something:
                pass
            """,
            "Expected the class 'Something' to inherit only from ``Enum``; "
            "only enumerations are expected in the binding model",
        )

    def test_enumeration_with_metaclass(self) -> None:
        self.check_error(
            """\
            class Something(Enum, metaclass=Meta):
                pass
            """,
            "Expected the class 'Something' to inherit only from ``Enum``; "
            "only enumerations are expected in the binding model",
        )

    def test_duplicate_variant(self) -> None:
        self.check_error(
            """\
            class Color(Enum):
                Red = "red"
                Red = "another red"
            """,
            "The variant 'Red' has been already bound in the enumeration 'Color'; "
            "every variant must be bound exactly once",
        )

    def test_non_string_token(self) -> None:
        self.check_error(
            """\
            class Color(Enum):
                Red = 1
            """,
            "Expected a string literal as the token of the variant 'Red', but got: 1",
        )

    def test_non_constant_token(self) -> None:
        self.check_error(
            """\
            class Color(Enum):
                Red = auto()
            """,
            "Expected a constant in the enumeration assignment, but got: auto()",
        )

    def test_multiple_targets(self) -> None:
        self.check_error(
            """\
            class Color(Enum):
                Red = Crimson = "red"
            """,
            "Expected a single target in the assignment, but got: 2",
        )

    def test_variant_with_leading_underscore(self) -> None:
        self.check_error(
            """\
            class Color(Enum):
                _Red = "red"
            """,
            "Expected a variant name without a leading underscore, but got: '_Red'",
        )

    def test_unknown_marker(self) -> None:
        self.check_error(
            """\
            @unique
            class Color(Enum):
                Red = "red"
            """,
            "The handling of the marker has not been implemented: 'unique'",
        )

    def test_method_without_marker(self) -> None:
        self.check_error(
            """\
            class Color(Enum):
                Red = "red"

                def detect(self) -> bool:
                    ...
            """,
            "Expected the method 'detect' to be decorated only with "
            "``@implementation_specific`` since methods of an enumeration "
            "are always implemented by snippets",
        )

    def test_private_method(self) -> None:
        self.check_error(
            """\
            class Color(Enum):
                Red = "red"

                @implementation_specific
                def _detect(self) -> bool:
                    ...
            """,
            "Unexpected protected or private method '_detect'; "
            "only public methods can be injected",
        )

    def test_method_without_self(self) -> None:
        self.check_error(
            """\
            class Color(Enum):
                Red = "red"

                @implementation_specific
                def detect() -> bool:
                    ...
            """,
            "Expected the first argument of the method 'detect' to be ``self``",
        )

    def test_method_with_body(self) -> None:
        self.check_error(
            """\
            class Color(Enum):
                Red = "red"

                @implementation_specific
                def detect(self) -> bool:
                    return True
            """,
            "Expected only a docstring and ``...`` or ``pass`` "
            "in the body of the implementation-specific method 'detect'",
        )

    def test_duplicate_method(self) -> None:
        self.check_error(
            """\
            class Color(Enum):
                Red = "red"

                @implementation_specific
                def detect(self) -> bool:
                    ...

                @implementation_specific
                def detect(self) -> bool:
                    ...
            """,
            "The method 'detect' has been already declared in the enumeration 'Color'",
        )

    def test_method_conflicting_with_variant(self) -> None:
        self.check_error(
            """\
            class Color(Enum):
                detect = "detect"

                @implementation_specific
                def detect(self) -> bool:
                    ...
            """,
            "The method 'detect' conflicts with a variant of the same name "
            "in the enumeration 'Color'",
        )

    def test_unexpected_statement_in_module(self) -> None:
        self.check_error(
            """\
            SOMETHING = 1
            """,
            "We do not know how to interpret the statement in "
            "the binding model: SOMETHING = 1",
        )

    def test_invalid_docstring(self) -> None:
        symbol_table, error = tests.common.parse_source(
            textwrap.dedent(
                '''\
                class Color(Enum):
                    """Broken :unknown_role:`x` here."""
                    Red = "red"
                '''
            )
        )
        self.assertIsNone(symbol_table)
        assert error is not None

        message = tests.common.most_underlying_messages(error)
        self.assertTrue(
            message.startswith("Failed to parse the description with docutils:"),
            message,
        )
        self.assertIn("unknown_role", message)

    def test_enumeration_name_not_capitalized(self) -> None:
        self.check_error(
            """\
            class color(Enum):
                Red = "red"
            """,
            "Expected the name of the enumeration to start "
            "with a capital letter, but got: 'color'",
        )

    def test_duplicate_enumeration_names(self) -> None:
        self.check_error(
            """\
            class Color(Enum):
                Red = "red"

            class Color(Enum):
                Blue = "blue"
            """,
            "The enumeration with the name 'Color' conflicts "
            "with another enumeration with the same name.",
        )


if __name__ == "__main__":
    unittest.main()
