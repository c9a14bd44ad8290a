class OrgdeckError(Exception):
    pass


class ParseError(OrgdeckError):
    """Raised when an outline document cannot be turned into a slide tree.

    The offending line number and line text are kept as attributes so that callers \
    can point users to the faulty region.
    """

    def __init__(
        self, message: str, line_number: int | None = None, line: str | None = None
    ) -> None:
        self.message = message
        self.line_number = line_number
        self.line = line
        if line_number is None:
            super().__init__(message)
        else:
            super().__init__(f"line {line_number}: {message}: {line!r}")


class InvalidPathError(OrgdeckError):
    pass
