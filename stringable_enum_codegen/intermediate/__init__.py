"""Provide the intermediate representation of the binding model."""

from stringable_enum_codegen.intermediate import _types, _translate

Description = _types.Description
EnumerationLiteral = _types.EnumerationLiteral
ImplementationSpecificMethod = _types.ImplementationSpecificMethod
Catalogue = _types.Catalogue
Enumeration = _types.Enumeration
MetaModel = _types.MetaModel
SymbolTable = _types.SymbolTable

translate = _translate.translate
