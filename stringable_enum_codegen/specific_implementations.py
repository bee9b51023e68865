"""Read the implementation-specific snippets injected into the generated code."""

import pathlib
import re
from typing import cast, Mapping, Tuple, Optional, List, MutableMapping

from icontract import require, ensure

from stringable_enum_codegen.common import Stripped, Identifier

IMPLEMENTATION_KEY_RE = re.compile("[a-zA-Z_][a-zA-Z_0-9.]*(/[a-zA-Z_][a-zA-Z_0-9.]*)*")


class ImplementationKey(str):
    """
    Represent a key in the map of specific implementations.

    The key is the POSIX path of the snippet relative to the snippets directory,
    *e.g.*, ``Color/detect.py``.
    """

    @require(lambda key: IMPLEMENTATION_KEY_RE.fullmatch(key))
    def __new__(cls, key: str) -> "ImplementationKey":
        return cast(ImplementationKey, key)


SpecificImplementations = Mapping[ImplementationKey, Stripped]

#: Key of the snippet with the additional imports of the generated module
IMPORTS_KEY = ImplementationKey("imports.py")


def method_key(enumeration_name: Identifier, method_name: Identifier) -> ImplementationKey:
    """Construct the key of the snippet implementing a method of an enumeration."""
    return ImplementationKey(f"{enumeration_name}/{method_name}.py")


@ensure(lambda result: (result[0] is not None) ^ (result[1] is not None))
def read_from_directory(
    snippets_dir: pathlib.Path,
) -> Tuple[Optional[SpecificImplementations], Optional[List[str]]]:
    """
    Read all the implementation-specific code snippets from the ``snippets_dir``.

    Empty snippets are ignored.

    :return: either the map of the implementations, or the errors
    """
    mapping = dict()  # type: MutableMapping[ImplementationKey, Stripped]

    errors = []  # type: List[str]
    for pth in sorted(snippets_dir.glob("**/*")):
        if pth.is_dir():
            continue

        maybe_key = pth.relative_to(snippets_dir).as_posix()
        if not IMPLEMENTATION_KEY_RE.fullmatch(maybe_key):
            errors.append(
                f"The snippet key is not valid "
                f"according to {IMPLEMENTATION_KEY_RE.pattern}: {maybe_key}"
            )
            continue

        text = pth.read_text(encoding="utf-8").strip()
        if len(text) == 0:
            continue

        mapping[ImplementationKey(maybe_key)] = Stripped(text)

    if errors:
        return None, errors

    return mapping, None
