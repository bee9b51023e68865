def to_logging(self) -> int:
    """Map the level to the corresponding level of ``logging``."""
    if self is LogLevel.TRACE:
        return 5
    elif self is LogLevel.DEBUG:
        return logging.DEBUG
    elif self is LogLevel.INFO:
        return logging.INFO
    elif self is LogLevel.WARN:
        return logging.WARNING
    elif self is LogLevel.ERROR:
        return logging.ERROR

    raise AssertionError(f"Unhandled log level: {self}")
