"""Error types for dailyFocus data models."""

from typing import List, Optional


class InvalidRuleConfiguration(ValueError):
    """A rule's type does not match its populated fields.

    Raised at the loading boundary; the evaluation functions never raise it
    and instead treat the rule as non-occurring.
    """

    def __init__(self, message: str, *, problems: Optional[List[str]] = None):
        super().__init__(message)
        self.problems = problems or []
