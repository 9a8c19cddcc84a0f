import json
import logging
import uuid
import os

PACKAGE_LOGGER = "finance_chatbot"

def _package_logger() -> logging.Logger:
    root = logging.getLogger(PACKAGE_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(JSONLogFormatter())
        root.addHandler(handler)
        # Until configure_logging() runs with loaded settings
        root.setLevel(os.getenv("LOG_LEVEL", "INFO"))
    return root

def get_logger(name: str) -> logging.Logger:
    """Child of the package logger; it inherits its handler and level.

    Names outside the package (``__main__``) are nested under it too.
    """
    _package_logger()
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)

def configure_logging(level: str) -> logging.Logger:
    root = _package_logger()
    root.setLevel(level.upper())
    return root

def with_request_id(record: dict) -> dict:
    if "request_id" not in record:
        record["request_id"] = str(uuid.uuid4())
    return record

class JSONLogFormatter(logging.Formatter):
    """One JSON object per line.

    A dict passed as the single log argument is merged into the payload:
    ``logger.info("upstream_response", {"payload": data})``.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
            "where": f"{record.module}:{record.lineno}",
        }
        if isinstance(record.args, dict):
            payload.update(record.args)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)
