from __future__ import annotations

import logging
import re

from careermatch.config import get_settings


_LOG_CONFIGURED = False

_BEARER_PATTERN = re.compile(r"(Bearer\s+)[A-Za-z0-9._~+/=-]+", re.IGNORECASE)
_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "urllib3")


class TokenRedactingFilter(logging.Filter):
    """Masks bearer tokens in formatted log messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _BEARER_PATTERN.sub(r"\1[redacted]", message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def configure_logging(level: str | None = None) -> None:
    global _LOG_CONFIGURED
    if _LOG_CONFIGURED:
        return

    settings = get_settings()
    name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    if settings.redact_log_pii:
        redactor = TokenRedactingFilter()
        for handler in logging.getLogger().handlers:
            handler.addFilter(redactor)
    for noisy in _NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)
    _LOG_CONFIGURED = True
