# pylint: disable=missing-module-docstring
# pylint: disable=missing-class-docstring
# pylint: disable=missing-function-docstring

import enum
import unittest

from stringable_enum_codegen import marker

import tests.common


class Test_marker(unittest.TestCase):
    def test_markers_do_not_change_the_marked(self) -> None:
        class Something(enum.Enum):
            FOO = "foo"

        def something() -> int:
            return 1984

        self.assertIs(Something, marker.no_display(Something))
        self.assertIs(something, marker.implementation_specific(something))

    def test_binding_model_is_importable(self) -> None:
        module = tests.common.import_module_from_path(
            tests.common.TEST_DATA_DIR / "cli_options" / "meta_model.py"
        )

        self.assertListEqual(
            ["Always", "Never", "Auto"], [literal.name for literal in module.Color]
        )
        self.assertListEqual(
            ["lf", "crlf", "native"], [literal.value for literal in module.Line_ending]
        )


if __name__ == "__main__":
    unittest.main()
