"""
scenelens.exceptions - Custom exception classes.

All scenelens-specific exceptions inherit from SceneLensError. The analysis
functions themselves never raise on string input; these cover the data and
configuration boundary.
"""


class SceneLensError(Exception):
    """Base exception for all scenelens errors."""

    pass


class ConfigError(SceneLensError):
    """Configuration loading or validation error."""

    pass


class LexiconError(SceneLensError):
    """Lexicon or valence table data is missing or malformed."""

    def __init__(self, source: str, message: str):
        self.source = source
        self.message = message
        super().__init__(f"{source}: {message}")


class ChapterError(SceneLensError):
    """Chapter input could not be read or split into scenes."""

    pass
