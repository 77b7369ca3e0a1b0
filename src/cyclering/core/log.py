from __future__ import annotations

import json
import logging
import os
import sys
from typing import Optional

from dotenv import load_dotenv

_configured = False

_PLAIN_FMT = "[%(asctime)s] %(levelname)s %(name)s | %(message)s"


class JsonHandler(logging.StreamHandler):
    """One JSON object per record on stdout."""
    def __init__(self, stream=None):
        super().__init__(stream=stream or sys.stdout)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = record.msg if isinstance(record.msg, dict) else record.getMessage()
            obj = {
                "ts": record.created,
                "lvl": record.levelname,
                "name": record.name,
                "msg": msg,
            }
            for k in ("filename", "lineno", "funcName"):
                obj[k] = getattr(record, k, None)
            self.stream.write(json.dumps(obj, ensure_ascii=False, default=str) + "\n")
            self.flush()
        except Exception:  # pragma: no cover
            self.handleError(record)


def _resolve_level(name: str) -> int:
    lvl = logging.getLevelName(name.upper())
    return lvl if isinstance(lvl, int) else logging.INFO


def setup(level: Optional[str] = None, json_mode: Optional[bool] = None, *, force: bool = False) -> None:
    """Configure the root logger.
    - Loads .env, then reads LOG_LEVEL / LOG_JSON when args are None
    - Repeated calls are no-ops unless force=True
    """
    global _configured
    if _configured and not force:
        return

    load_dotenv()

    py_level = _resolve_level(level or os.getenv("LOG_LEVEL", "INFO"))
    json_flag = json_mode if json_mode is not None else (os.getenv("LOG_JSON", "0") == "1")

    root = logging.getLogger()
    # drop our previous handler only; leave pytest's capture handlers alone
    for h in list(root.handlers):
        if getattr(h, "_cyclering", False):
            root.removeHandler(h)
    root.setLevel(py_level)

    if json_flag:
        handler: logging.Handler = JsonHandler()
    else:
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=_PLAIN_FMT))
    handler._cyclering = True  # type: ignore[attr-defined]
    root.addHandler(handler)

    _configured = True


def get(name: str) -> logging.Logger:
    return logging.getLogger(name)


def set_level(level: str) -> None:
    """Adjust the root level at runtime (e.g. inside a test)."""
    logging.getLogger().setLevel(_resolve_level(level))
