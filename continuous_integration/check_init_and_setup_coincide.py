#!/usr/bin/env python3

"""Check that the distribution and stringable_enum_codegen/__init__.py are in sync."""
import os
import pathlib
import subprocess
import sys
from typing import Optional, Dict

import stringable_enum_codegen

#: Map the fields of ``setup.py`` to the attributes of the package
_FIELD_TO_ATTRIBUTE = {
    "version": "__version__",
    "author": "__author__",
    "license": "__license__",
    "description": "__doc__",
}

#: Map the status classifiers of the distribution to the ``__status__``
_STATUS_MAP = {
    "Development Status :: 1 - Planning": "Planning",
    "Development Status :: 2 - Pre-Alpha": "Pre-Alpha",
    "Development Status :: 3 - Alpha": "Alpha",
    "Development Status :: 4 - Beta": "Beta",
    "Development Status :: 5 - Production/Stable": "Production/Stable",
    "Development Status :: 6 - Mature": "Mature",
    "Development Status :: 7 - Inactive": "Inactive",
}


def _query_setup_py(setup_py_pth: pathlib.Path, field: str) -> str:
    """Retrieve the ``field`` of the distribution from ``setup.py``."""
    return subprocess.check_output(
        [sys.executable, str(setup_py_pth), f"--{field}"], encoding="utf-8"
    ).strip()


def main() -> int:
    """Execute the main routine."""
    repo_root = pathlib.Path(os.path.realpath(__file__)).parent.parent

    setup_py_pth = repo_root / "setup.py"
    if not setup_py_pth.exists():
        raise RuntimeError(f"Could not find the setup.py: {setup_py_pth}")

    success = True

    setup_py_map = dict()  # type: Dict[str, str]

    for field, attribute in _FIELD_TO_ATTRIBUTE.items():
        setup_py_map[field] = _query_setup_py(setup_py_pth, field)

        in_init = getattr(stringable_enum_codegen, attribute)
        if setup_py_map[field] != in_init:
            print(
                f"The {field} in the setup.py is {setup_py_map[field]!r}, "
                f"while the {attribute} in stringable_enum_codegen/__init__.py "
                f"is: {in_init!r}",
                file=sys.stderr,
            )
            success = False

    # Classifiers need special attention as there are multiple.
    classifiers = _query_setup_py(setup_py_pth, "classifiers").splitlines()

    status_classifier = None  # type: Optional[str]
    for classifier in classifiers:
        if classifier in _STATUS_MAP:
            status_classifier = classifier
            break

    if status_classifier is None:
        print(
            "Expected a status classifier in setup.py "
            "(e.g., 'Development Status :: 3 - Alpha'), but found none.",
            file=sys.stderr,
        )
        success = False
    else:
        expected_status_in_init = _STATUS_MAP[status_classifier]

        if expected_status_in_init != stringable_enum_codegen.__status__:
            print(
                f"Expected status {expected_status_in_init} "
                f"according to setup.py in stringable_enum_codegen/__init__.py, "
                f"but found: {stringable_enum_codegen.__status__}",
                file=sys.stderr,
            )
            success = False

    if not success:
        return -1

    return 0


if __name__ == "__main__":
    sys.exit(main())
