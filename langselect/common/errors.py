"""Domain errors and failure typing."""


class SelectorError(Exception):
    """Base class for selector failures."""

    error_code = "SELECTOR_ERROR"


class ConfigError(SelectorError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class CandidateError(SelectorError):
    """Raised when a candidate document cannot be described."""

    error_code = "CANDIDATE_ERROR"
