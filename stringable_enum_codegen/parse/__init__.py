"""Parse the binding model."""

from stringable_enum_codegen.parse import _types, _translate

Description = _types.Description
EnumerationLiteral = _types.EnumerationLiteral
ImplementationSpecificMethod = _types.ImplementationSpecificMethod
Enumeration = _types.Enumeration
MetaModel = _types.MetaModel
UnverifiedSymbolTable = _types.UnverifiedSymbolTable
SymbolTable = _types.SymbolTable
is_string_expr = _types.is_string_expr

source_to_atok = _translate.source_to_atok
check_expected_imports = _translate.check_expected_imports
atok_to_symbol_table = _translate.atok_to_symbol_table
