"""Generate the Python module with the string bindings of the enumerations."""
