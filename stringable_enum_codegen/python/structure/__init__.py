"""Generate the Python enumerations together with their catalogues."""

from stringable_enum_codegen.python.structure import _generate

VerifiedIntermediateSymbolTable = _generate.VerifiedIntermediateSymbolTable
verify = _generate.verify
generate = _generate.generate
