from __future__ import annotations
import logging
import re


REDACT_PATTERNS = [
    (re.compile(r"sk-[A-Za-z0-9_-]{20,}"), "***"),  # OpenAI / Anthropic style keys
    (re.compile(r"eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+"), "***"),  # JWTs (Supabase keys)
    (re.compile(r"(?i)(bearer\s+)[A-Za-z0-9._-]{16,}"), r"\1***"),
]


def redact(value: str) -> str:
    redacted = value
    for pat, repl in REDACT_PATTERNS:
        redacted = pat.sub(repl, redacted)
    return redacted


class RedactingFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        # Render args first so secrets passed as %s parameters are covered too
        if record.args:
            record.msg = record.getMessage()
            record.args = None
        if isinstance(record.msg, str):
            record.msg = redact(record.msg)
        formatted = super().format(record)
        # Tracebacks are rendered by the base formatter; redact the final text
        return redact(formatted)


def setup_logging(level: int | str = logging.INFO) -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger = logging.getLogger()
    logger.setLevel(level)
    # Clear existing handlers in reload scenarios
    logger.handlers.clear()

    handler = logging.StreamHandler()
    formatter = RedactingFormatter(
        fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    logging.getLogger("uvicorn.error").setLevel(level)
    logging.getLogger("uvicorn.access").setLevel(level)
    # httpx logs every request line at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
