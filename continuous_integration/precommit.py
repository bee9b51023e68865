#!/usr/bin/env python3

"""Run pre-commit checks on the repository."""
import argparse
import enum
import os
import pathlib
import shlex
import subprocess
import sys
import tempfile
from typing import Callable, List, Mapping, Optional, Sequence

#: Packages and directories checked by the linters
_PYTHON_TARGETS = ["stringable_enum_codegen", "tests", "continuous_integration"]


class Step(enum.Enum):
    """Enumerate different pre-commit steps."""

    REFORMAT = "reformat"
    MYPY = "mypy"
    PYLINT = "pylint"
    TEST = "test"
    DOCTEST = "doctest"
    GENERATE = "generate"
    CHECK_INIT_AND_SETUP_COINCIDE = "check-init-and-setup-coincide"


def call_and_report(
    verb: str,
    cmd: Sequence[str],
    cwd: Optional[pathlib.Path] = None,
    env: Optional[Mapping[str, str]] = None,
) -> int:
    """
    Wrap a subprocess call with the reporting to STDERR if it failed.

    Return 1 if there is an error and 0 otherwise.
    """
    exit_code = subprocess.call(cmd, cwd=str(cwd) if cwd is not None else None, env=env)

    if exit_code != 0:
        cmd_str = " ".join(shlex.quote(part) for part in cmd)
        print(
            f"Failed to {verb} with exit code {exit_code}: {cmd_str}", file=sys.stderr
        )

    return exit_code


def _reformat(repo_root: pathlib.Path, overwrite: bool) -> int:
    targets = _PYTHON_TARGETS + ["setup.py"]
    if overwrite:
        return call_and_report(verb="black", cmd=["black"] + targets, cwd=repo_root)

    return call_and_report(
        verb="check with black", cmd=["black", "--check"] + targets, cwd=repo_root
    )


def _mypy(repo_root: pathlib.Path, overwrite: bool) -> int:
    # pylint: disable=unused-argument
    config_file = pathlib.Path("continuous_integration") / "mypy.ini"
    return call_and_report(
        verb="mypy",
        cmd=["mypy", "--strict", "--config-file", str(config_file)] + _PYTHON_TARGETS,
        cwd=repo_root,
    )


def _pylint(repo_root: pathlib.Path, overwrite: bool) -> int:
    # pylint: disable=unused-argument
    rcfile = pathlib.Path("continuous_integration") / "pylint.rc"
    return call_and_report(
        verb="pylint",
        cmd=["pylint", f"--rcfile={rcfile}"] + _PYTHON_TARGETS,
        cwd=repo_root,
    )


def _test(repo_root: pathlib.Path, overwrite: bool) -> int:
    # pylint: disable=unused-argument
    env = os.environ.copy()
    env["ICONTRACT_SLOW"] = "true"

    exit_code = call_and_report(
        verb="execute unit tests",
        cmd=[
            "coverage",
            "run",
            "--source",
            "stringable_enum_codegen",
            "-m",
            "unittest",
            "discover",
        ],
        cwd=repo_root,
        env=env,
    )
    if exit_code != 0:
        return exit_code

    return call_and_report(
        verb="report the coverage", cmd=["coverage", "report"], cwd=repo_root
    )


def _doctest(repo_root: pathlib.Path, overwrite: bool) -> int:
    # pylint: disable=unused-argument
    modules = [
        str(pth)
        for pth in sorted((repo_root / "stringable_enum_codegen").glob("**/*.py"))
        if ">>>" in pth.read_text(encoding="utf-8")
    ]

    return call_and_report(
        verb="doctest", cmd=[sys.executable, "-m", "doctest"] + modules, cwd=repo_root
    )


def _generate(repo_root: pathlib.Path, overwrite: bool) -> int:
    """Generate every case from ``test_data/`` and byte-compile the Python output."""
    # pylint: disable=unused-argument
    for case_dir in sorted((repo_root / "test_data").iterdir()):
        if not case_dir.is_dir():
            continue

        for target in ["python", "jsonschema"]:
            with tempfile.TemporaryDirectory() as tmp_dir:
                cmd = [
                    sys.executable,
                    "-m",
                    "stringable_enum_codegen",
                    "--model_path",
                    str(case_dir / "meta_model.py"),
                    "--output_dir",
                    tmp_dir,
                    "--target",
                    target,
                ]

                snippets_dir = case_dir / "snippets"
                if snippets_dir.exists():
                    cmd.extend(["--snippets_dir", str(snippets_dir)])

                exit_code = call_and_report(
                    verb=f"generate {target} for {case_dir.name}",
                    cmd=cmd,
                    cwd=repo_root,
                )
                if exit_code != 0:
                    return exit_code

                if target == "python":
                    exit_code = call_and_report(
                        verb=f"compile the generated code for {case_dir.name}",
                        cmd=[
                            sys.executable,
                            "-m",
                            "py_compile",
                            str(pathlib.Path(tmp_dir) / "enums.py"),
                        ],
                    )
                    if exit_code != 0:
                        return exit_code

    return 0


def _check_init_and_setup_coincide(repo_root: pathlib.Path, overwrite: bool) -> int:
    # pylint: disable=unused-argument
    return call_and_report(
        verb="check that stringable_enum_codegen/__init__.py and setup.py coincide",
        cmd=[
            sys.executable,
            "continuous_integration/check_init_and_setup_coincide.py",
        ],
        cwd=repo_root,
    )


_STEP_TO_RUN = {
    Step.REFORMAT: _reformat,
    Step.MYPY: _mypy,
    Step.PYLINT: _pylint,
    Step.TEST: _test,
    Step.DOCTEST: _doctest,
    Step.GENERATE: _generate,
    Step.CHECK_INIT_AND_SETUP_COINCIDE: _check_init_and_setup_coincide,
}  # type: Mapping[Step, Callable[[pathlib.Path, bool], int]]

assert all(step in _STEP_TO_RUN for step in Step)


def main() -> int:
    """Execute entry_point routine."""
    steps_str = " ".join(value.value for value in Step)

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--overwrite",
        help="Try to automatically fix the offending files (e.g., by re-formatting).",
        action="store_true",
    )
    parser.add_argument(
        "--select",
        help=(
            "If set, only the selected steps are executed. "
            f"The steps are given as a space-separated list of: {steps_str}"
        ),
        metavar="",
        nargs="+",
        choices=[value.value for value in Step],
    )
    parser.add_argument(
        "--skip",
        help=(
            "If set, skips the specified steps. "
            f"The steps are given as a space-separated list of: {steps_str}"
        ),
        metavar="",
        nargs="+",
        choices=[value.value for value in Step],
    )

    args = parser.parse_args()

    selects = (
        [Step(value) for value in args.select]
        if args.select is not None
        else list(Step)
    )  # type: List[Step]
    skips = [Step(value) for value in args.skip] if args.skip is not None else []

    repo_root = pathlib.Path(os.path.realpath(__file__)).parent.parent

    for step in Step:
        if step not in selects or step in skips:
            print(f"Skipped {step.value}.")
            continue

        print(f"Running {step.value}...")
        exit_code = _STEP_TO_RUN[step](repo_root, bool(args.overwrite))
        if exit_code != 0:
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
