"""Provide common functions shared among the Python code generation modules."""
from typing import List, Mapping

from icontract import ensure

from stringable_enum_codegen.common import Stripped

# See: https://python-reference.readthedocs.io/en/latest/docs/str/escapes.html
_BASE_ESCAPING_IN_PYTHON = {
    "\\": "\\\\",
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\0": "\\x00",
}  # type: Mapping[str, str]

_ESCAPING_IN_PYTHON_INCLUDING_DOUBLE_QUOTES = {
    **_BASE_ESCAPING_IN_PYTHON,
    **{'"': '\\"'},
}  # type: Mapping[str, str]

_ESCAPING_IN_PYTHON_INCLUDING_SINGLE_QUOTES = {
    **_BASE_ESCAPING_IN_PYTHON,
    **{"'": "\\'"},
}  # type: Mapping[str, str]


# fmt: off
@ensure(
    lambda result:
    (result.startswith("'") and result.endswith("'"))
    or (result.startswith('"') and result.endswith('"'))
)
# fmt: on
def string_literal(text: str) -> Stripped:
    """
    Generate a string literal from the ``text``.

    Double quotes are preferred. If the ``text`` contains more double quotes than
    single quotes, single quotes are used to enclose the literal so that we need
    to escape as little as possible.

    >>> string_literal("always")
    '"always"'

    >>> string_literal('say "hello"')
    '\\'say "hello"\\''

    >>> string_literal("tab\\there")
    '"tab\\\\there"'
    """
    if text.count('"') <= text.count("'"):
        mapping = _ESCAPING_IN_PYTHON_INCLUDING_DOUBLE_QUOTES
        enclosing = '"'
    else:
        mapping = _ESCAPING_IN_PYTHON_INCLUDING_SINGLE_QUOTES
        enclosing = "'"

    escaped = "".join(mapping.get(character, character) for character in text)

    return Stripped(f"{enclosing}{escaped}{enclosing}")


def docstring(text: Stripped) -> Stripped:
    """
    Generate a docstring out of the text.

    >>> docstring(Stripped("Represent a color."))
    '\"\"\"Represent a color.\"\"\"'
    """
    escaped = text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')

    # A quote right before the closing quotes would terminate the literal early.
    if escaped.endswith('"'):
        escaped = escaped[:-1] + '\\"'

    if 3 + len(escaped) + 3 < 70 and "\n" not in escaped:
        return Stripped(f'"""{escaped}"""')

    return Stripped(f'"""\n{escaped}\n"""')


def documentation_comment(text: Stripped) -> Stripped:
    """
    Generate the documentation comment with the given ``text``.

    >>> print(documentation_comment(Stripped("First line\\n\\nSecond line")))
    #: First line
    #:
    #: Second line
    """
    commented_lines = []  # type: List[str]
    for line in text.splitlines():
        if len(line.strip()) == 0:
            commented_lines.append("#:")
        else:
            commented_lines.append(f"#: {line}")

    return Stripped("\n".join(commented_lines))


INDENT = "    "

WARNING = Stripped(
    """\
# This code has been automatically generated by stringable-enum-codegen.
# Do NOT edit or append."""
)
