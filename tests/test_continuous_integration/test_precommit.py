# pylint: disable=missing-module-docstring
# pylint: disable=missing-class-docstring
# pylint: disable=missing-function-docstring

import os
import pathlib
import unittest

import continuous_integration.precommit


class Test_precommit(unittest.TestCase):
    def test_every_step_has_a_runner(self) -> None:
        # pylint: disable=protected-access
        for step in continuous_integration.precommit.Step:
            self.assertIn(step, continuous_integration.precommit._STEP_TO_RUN)

    def test_generate_all_test_data(self) -> None:
        repo_root = pathlib.Path(os.path.realpath(__file__)).parent.parent.parent

        # pylint: disable=protected-access
        exit_code = continuous_integration.precommit._generate(
            repo_root=repo_root, overwrite=False
        )
        self.assertEqual(0, exit_code)


if __name__ == "__main__":
    unittest.main()
