"""Logging utilities for the HitBTC client."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_LOG_DIR = Path("logs")
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: int = logging.INFO, log_file: Optional[Path] = None) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=DATE_FORMAT, handlers=handlers)


@dataclass
class RequestLogger:
    """Structured JSON-lines log of requests, responses and errors.

    Only method, URL, status and timing are recorded. Headers and bodies are
    never written, so signatures and credentials stay out of the log.
    """

    log_dir: Path = DEFAULT_LOG_DIR
    logger_name: str = "hitbtc_api.requests"
    level: int = logging.INFO
    _logger: logging.Logger = field(init=False)

    def __post_init__(self) -> None:
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self._logger = logging.getLogger(self.logger_name)
        self._logger.setLevel(self.level)
        log_file = (self.log_dir / "requests.log").resolve()
        if not any(
            isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == log_file
            for handler in self._logger.handlers
        ):
            handler = logging.FileHandler(log_file)
            handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(message)s", datefmt=DATE_FORMAT))
            self._logger.addHandler(handler)

    def _log(self, event_type: str, payload: Dict[str, Any], level: int = logging.INFO) -> None:
        entry = {"type": event_type, "timestamp": datetime.now(timezone.utc).isoformat(), **payload}
        self._logger.log(level, json.dumps(entry, ensure_ascii=False, default=str))

    def log_request(self, method: str, url: str, *, signed: bool) -> None:
        self._log("request", {"method": method, "url": url, "signed": signed})

    def log_response(self, method: str, url: str, status: int, elapsed: float) -> None:
        self._log(
            "response",
            {"method": method, "url": url, "status": status, "elapsed_ms": round(elapsed * 1000, 1)},
        )

    def log_error(self, message: str, *, exception: Optional[Exception] = None) -> None:
        payload: Dict[str, Any] = {"message": message}
        if exception is not None:
            payload["exception"] = repr(exception)
        self._log("error", payload, level=logging.ERROR)


__all__ = ["configure_logging", "RequestLogger"]
