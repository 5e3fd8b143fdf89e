"""Exception hierarchy for corpus loading."""


class CorpusError(Exception):
    """Base class for all corpus errors."""


class FrontMatterError(CorpusError):
    """Raised when a guide's YAML front matter is missing or invalid.

    ``line`` is the 1-based file line the problem was found on, when known.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"line {self.line}: {self.message}"


class CorpusNotFoundError(CorpusError):
    """Raised when the corpus root directory does not exist."""
