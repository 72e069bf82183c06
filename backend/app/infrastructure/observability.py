"""Structured Logging — one JSON object per line, with the BloodBond context keys.

Invariants:
    - Every line carries timestamp, level, logger and message
    - Context passed through `extra=` (request id, transaction id, ...) is kept
      only for the keys in CONTEXT_KEYS, stringified
    - log_format "json" in deployments, plain text for local runs and tests

Design Decisions:
    - stdlib logging with a custom Formatter: services only ever call
      logging.getLogger(__name__)
    - setup_logging replaces the root handlers it finds, so a second lifespan
      (reload) does not duplicate every line
"""

import json
import logging
from datetime import datetime, timezone

CONTEXT_KEYS = (
    "request_id",
    "status",
    "transaction_id",
    "checkout_session_id",
    "user_email",
    "attempt",
    "error_code",
    "path",
)

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s | %(message)s"


class JSONFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, str(getattr(record, key)))
            for key in CONTEXT_KEYS
            if getattr(record, key, None) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging(level: str = "INFO", log_format: str = "json") -> None:
    """Install a single stream handler on the root logger."""
    handler = logging.StreamHandler()
    handler.setFormatter(
        JSONFormatter() if log_format == "json" else logging.Formatter(TEXT_FORMAT),
    )
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    # SQL echo stays off unless explicitly asked for via LOG_LEVEL=DEBUG
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if level.upper() == "DEBUG" else logging.WARNING,
    )
