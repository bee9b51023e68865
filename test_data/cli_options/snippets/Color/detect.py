def detect(self, stream: TextIO) -> bool:
    """Decide whether to colorize the output written to the ``stream``."""
    if self is Color.ALWAYS:
        return True
    elif self is Color.NEVER:
        return False
    elif self is Color.AUTO:
        return stream.isatty()

    raise AssertionError(f"Unhandled color policy: {self}")
