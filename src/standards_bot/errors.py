from __future__ import annotations


class StandardsError(ValueError):
    """Fatal problem that stops a standards run before results are reported."""


class InvalidPatternError(StandardsError):
    def __init__(self, pattern: str, detail: str, option: str | None = None) -> None:
        self.pattern = pattern
        self.detail = detail
        self.option = option
        where = f" for {option}" if option else ""
        super().__init__(f"Invalid pattern{where}: {pattern!r} ({detail})")


class ConfigurationError(StandardsError):
    pass
