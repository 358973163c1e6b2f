"""Exceptions raised while loading settings and the zone catalog."""

from typing import Dict, Iterable, List, Mapping, Optional


class ConfigurationError(Exception):
    """A startup input (config file, environment, zone catalog) is unusable.

    Attributes:
        message: One-line summary
        errors: Individual problems, in the order they were found
        suggestions: Hints for the operator
        source: File or input the problem came from, if known
    """

    def __init__(
        self,
        message: str,
        errors: Optional[Iterable[str]] = None,
        suggestions: Optional[Iterable[str]] = None,
        source: Optional[str] = None,
    ):
        self.message = message
        self.errors = list(errors or ())
        self.suggestions = list(suggestions or ())
        self.source = str(source) if source else None
        super().__init__(message)

    def __str__(self) -> str:
        lines = [f"{self.message} [{self.source}]" if self.source else self.message]
        lines.extend(f"  - {error}" for error in self.errors)
        lines.extend(f"  hint: {suggestion}" for suggestion in self.suggestions)
        return "\n".join(lines)


class CatalogLoadError(ConfigurationError):
    """The delivery zone catalog is missing, unreadable or invalid.

    Always fatal at startup. Problems tied to a single record are kept per
    record index in record_errors and also listed in errors as
    "record <index>: <problem>".
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        record_errors: Optional[Mapping[int, Iterable[str]]] = None,
        errors: Optional[Iterable[str]] = None,
        suggestions: Optional[Iterable[str]] = None,
    ):
        self.record_errors: Dict[int, List[str]] = {
            index: list(problems) for index, problems in sorted((record_errors or {}).items())
        }
        flattened = list(errors or ())
        flattened.extend(
            f"record {index}: {problem}"
            for index, problems in self.record_errors.items()
            for problem in problems
        )
        super().__init__(message, errors=flattened, suggestions=suggestions, source=source)

    @property
    def failed_records(self) -> List[int]:
        """Indexes of the catalog records that failed validation, ascending."""
        return list(self.record_errors)
