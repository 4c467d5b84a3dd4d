"""Application constants."""

WILDCARD = "*"

SCORE_NONE = 0
SCORE_WILDCARD = 5
SCORE_EXACT = 10

SELECTORS_FILENAME = "selectors.yml"
COMMANDS = (
    "score",
    "check",
)
EXIT_SUCCESS = 0
EXIT_NO_MATCH = 10
EXIT_HARD_FAIL = 20
JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "event",
    "status",
    "selector",
    "scheme",
    "language",
    "score",
    "error_code",
    "message",
)
