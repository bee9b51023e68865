"""Provide the enumerations of the command-line options of a code formatter."""

from enum import Enum

from stringable_enum_codegen.marker import implementation_specific, no_display


class Color(Enum):
    """Define when to colorize the output."""

    Always = "always"
    """Colorize even if the output is redirected."""

    Never = "never"
    """Never colorize the output."""

    Auto = "auto"
    """Colorize only if the output is a terminal."""

    @implementation_specific
    def detect(self, stream) -> bool:
        """Decide whether to colorize the output written to the ``stream``."""
        ...


class Log_level(Enum):
    """Define the verbosity of the log."""

    Trace = "trace"
    Debug = "debug"
    Info = "info"
    Warn = "warn"
    Error = "error"

    @implementation_specific
    def to_logging(self) -> int:
        """Map the level to the corresponding level of ``logging``."""
        ...


@no_display
class Line_ending(Enum):
    """Represent the line endings of the formatted files."""

    LF = "lf"
    CRLF = "crlf"
    Native = "native"
