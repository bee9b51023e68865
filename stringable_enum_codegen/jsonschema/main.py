"""Generate the JSON schema of the tokens of the enumerations."""
import collections
import json
from typing import (
    TextIO,
    Any,
    MutableMapping,
    Optional,
    Tuple,
    List,
    Mapping,
)

from icontract import ensure

import stringable_enum_codegen.jsonschema
from stringable_enum_codegen import (
    naming,
    specific_implementations,
    intermediate,
    run,
)
from stringable_enum_codegen.common import Stripped, Error

assert stringable_enum_codegen.jsonschema.__doc__ == __doc__

#: Key of the optional snippet with the base of the schema
SCHEMA_BASE_KEY = specific_implementations.ImplementationKey("schema_base.json")

_DEFAULT_SCHEMA_BASE = collections.OrderedDict(
    [("$schema", "https://json-schema.org/draft/2019-09/schema")]
)  # type: Mapping[str, Any]


def _define_for_enumeration(
    enumeration: intermediate.Enumeration,
) -> MutableMapping[str, Any]:
    """
    Generate the definition for an ``enumeration``.

    The tokens are listed in the order of the catalogue. The definitions are to be
    *extended* with the resulting mapping.
    """
    definition = collections.OrderedDict()  # type: MutableMapping[str, Any]
    definition["type"] = "string"
    definition["enum"] = list(enumeration.catalogue.tokens)

    if enumeration.description is not None and enumeration.description.summary:
        definition["description"] = enumeration.description.summary

    definition_name = naming.json_definition_name(enumeration.name)

    return collections.OrderedDict([(definition_name, definition)])


class Definitions:
    """Store definitions of the schema as we go."""

    def __init__(self) -> None:
        """Initialize as empty."""
        self._definitions = collections.OrderedDict()  # type: MutableMapping[str, Any]

    def get(self) -> Mapping[str, Any]:
        """Get the content."""
        return self._definitions

    def update_for(
        self, enumeration: intermediate.Enumeration, extension: Mapping[str, Any]
    ) -> Optional[Error]:
        """Update the definitions with ``extension`` related to ``enumeration``."""
        for key, definition in extension.items():
            if key in self._definitions:
                return Error(
                    enumeration.parsed.node,
                    f"The JSON definition {key!r} of the enumeration "
                    f"{enumeration.name!r} has been already provided "
                    f"in the definitions by another enumeration",
                )

            self._definitions[key] = definition

        return None


@ensure(lambda result: (result[0] is not None) ^ (result[1] is not None))
def _load_schema_base(
    spec_impls: specific_implementations.SpecificImplementations,
) -> Tuple[Optional[MutableMapping[str, Any]], Optional[Error]]:
    """Load the base of the schema from the snippet, or fall back to the default."""
    schema_base_json = spec_impls.get(SCHEMA_BASE_KEY, None)
    if schema_base_json is None:
        return collections.OrderedDict(_DEFAULT_SCHEMA_BASE), None

    try:
        # noinspection PyTypeChecker
        schema = json.loads(schema_base_json, object_pairs_hook=collections.OrderedDict)
    except json.JSONDecodeError as err:
        return None, Error(
            None, f"Failed to parse the base schema from {SCHEMA_BASE_KEY}: {err}"
        )

    if not isinstance(schema, dict):
        return None, Error(
            None,
            f"Expected the base schema from {SCHEMA_BASE_KEY} to be a JSON object, "
            f"but got: {type(schema)}",
        )

    if "definitions" in schema:
        return None, Error(
            None,
            f"The property ``definitions`` unexpected in the base JSON schema "
            f"from: {SCHEMA_BASE_KEY}",
        )

    return schema, None


@ensure(lambda result: (result[0] is not None) ^ (result[1] is not None))
def generate(
    symbol_table: intermediate.SymbolTable,
    spec_impls: specific_implementations.SpecificImplementations,
) -> Tuple[Optional[Stripped], Optional[List[Error]]]:
    """Generate the JSON schema based on the symbol table."""
    schema, error = _load_schema_base(spec_impls=spec_impls)
    if error is not None:
        return None, [error]

    assert schema is not None

    errors = []  # type: List[Error]

    definitions = Definitions()

    for enumeration in symbol_table.enumerations:
        update_error = definitions.update_for(
            enumeration=enumeration,
            extension=_define_for_enumeration(enumeration=enumeration),
        )
        if update_error is not None:
            errors.append(update_error)

    if len(errors) > 0:
        return None, errors

    definitions_mapping = definitions.get()

    schema["definitions"] = collections.OrderedDict(
        [
            (name, definitions_mapping[name])
            for name in sorted(definitions_mapping.keys())
        ]
    )

    return Stripped(json.dumps(schema, indent=2)), None


def execute(context: run.Context, stdout: TextIO, stderr: TextIO) -> int:
    """Generate the code."""
    code, errors = generate(
        symbol_table=context.symbol_table,
        spec_impls=context.spec_impls,
    )

    if errors is not None:
        run.write_error_report(
            message=f"Failed to generate the JSON Schema "
            f"based on {context.model_path}",
            errors=[context.lineno_columner.error_message(error) for error in errors],
            stderr=stderr,
        )
        return 1

    assert code is not None

    pth = context.output_dir / "schema.json"
    try:
        pth.write_text(code, encoding="utf-8")
    except Exception as exception:
        run.write_error_report(
            message=f"Failed to write the JSON schema to {pth}",
            errors=[str(exception)],
            stderr=stderr,
        )
        return 1

    stdout.write(f"Code generated to: {context.output_dir}\n")
    return 0
