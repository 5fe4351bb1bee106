"""Custom exception hierarchy for the trade journal.

The analytics themselves never raise on bad trade data; these cover
caller mistakes (bad config, unreadable files, unknown period names).
"""


class JournalError(Exception):
    """Base exception for all trade journal errors."""


# --- Configuration ---
class ConfigError(JournalError):
    """Invalid or missing configuration."""


# --- Data ---
class DataError(JournalError):
    """Trade data could not be read or interpreted."""


class TradeFileError(DataError):
    """Trade file is missing, unreadable, or in an unsupported format."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load trades from {path}: {reason}")


class UnknownPeriodError(DataError):
    """Unsupported timeframe or period name."""

    def __init__(self, kind: str, value: object):
        self.kind = kind
        self.value = value
        super().__init__(f"Unknown {kind}: {value!r}")
