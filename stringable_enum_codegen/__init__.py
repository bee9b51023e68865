"""Generate string bindings of enumerations based on a binding model."""

__version__ = "0.1.0"
__author__ = "stringable-enum-codegen developers"
__license__ = "License :: OSI Approved :: MIT License"
__status__ = "Alpha"
