class UsageError(Exception):
    """The tool was invoked in a way it does not support."""


class FormatError(ValueError):
    """
    An input file does not follow the format it claims to be in.

    `line` is the 1-based line number and `index` the 0-based value index
    where the problem was found, when known.
    """

    def __init__(self, message: str, line: int = None, index: int = None):
        super().__init__(message)
        self.line = line
        self.index = index
