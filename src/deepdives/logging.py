"""Log setup for the deep-dive service.

Records from every ``deepdives.*`` logger go to a rotating file and to stderr.
Both handlers share a filter that strips GitHub credentials, so neither the
configured token nor a token echoed back in an API error body reaches a log.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FILE = "deepdives.log"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
MAX_BYTES = 10 * 1024 * 1024
BACKUP_COUNT = 5

# ghp_ (PAT), gho_ (OAuth), ghu_/ghs_ (app user/installation), ghr_ (refresh)
_TOKEN_RE = re.compile(r"\b(?:gh[pousr]_[A-Za-z0-9]{36,}|github_pat_[A-Za-z0-9_]{22,})")
_CREDENTIAL_RE = re.compile(
    r"\b(Bearer |token=|Authorization: token )[A-Za-z0-9._~+/-]+=*", re.IGNORECASE
)

REDACTED = "[REDACTED]"


def redact(text: str, secrets: Iterable[str] = ()) -> str:
    """Replace GitHub tokens, bearer credentials and the given secrets."""
    for secret in secrets:
        if secret:
            text = text.replace(secret, REDACTED)
    text = _TOKEN_RE.sub("[GITHUB_TOKEN]", text)
    return _CREDENTIAL_RE.sub(rf"\1{REDACTED}", text)


def response_excerpt(text: str, limit: int = 500) -> str:
    """Redacted head of an HTTP response body, for error messages and logs.

    Redaction runs before the cut so a token straddling ``limit`` cannot
    leak a prefix.
    """
    text = redact(text)
    if len(text) <= limit:
        return text
    return f"{text[:limit]}... [{len(text) - limit} more chars]"


class RedactingFilter(logging.Filter):
    """Rewrites each record's message with credentials removed."""

    def __init__(self, secrets: Iterable[str] = ()) -> None:
        super().__init__()
        self.secrets = tuple(s for s in secrets if s)

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = redact(record.getMessage(), self.secrets)
        record.args = None
        return True


def configure_logging(
    log_dir: str | Path | None = None,
    *,
    level: str | None = None,
    secrets: Iterable[str] = (),
) -> Path:
    """Attach the file and stderr handlers to the ``deepdives`` logger.

    Calling it again replaces the handlers from the previous call.

    Args:
        log_dir: Directory for the log file. Falls back to DEEPDIVES_LOG_DIR,
            then ``logs``.
        level: Level name. Falls back to DEEPDIVES_LOG_LEVEL, then INFO.
            Unknown names mean INFO.
        secrets: Literal values to scrub from every record, such as the
            configured GitHub token.

    Returns:
        Path of the log file.
    """
    log_dir = Path(log_dir or os.environ.get("DEEPDIVES_LOG_DIR") or "logs")
    log_dir.mkdir(parents=True, exist_ok=True)
    level = (level or os.environ.get("DEEPDIVES_LOG_LEVEL") or "INFO").upper()

    logger = logging.getLogger("deepdives")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    numeric_level = getattr(logging, level, None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    logger.setLevel(numeric_level)

    log_path = log_dir / LOG_FILE
    formatter = logging.Formatter(LOG_FORMAT)
    redactor = RedactingFilter(secrets)
    handlers: list[logging.Handler] = [
        RotatingFileHandler(
            log_path, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8"
        ),
        logging.StreamHandler(),
    ]
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(redactor)
        logger.addHandler(handler)

    logger.info("Logging to %s at %s", log_path, level)
    return log_path
