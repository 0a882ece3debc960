"""Logging utilities for the storefront web app.

Provides structured JSONL logging for imports, saves and checkout events.
"""

import json
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

__all__ = ["log_event", "get_log_file", "LOG_DIR"]

LOG_DIR = Path(os.getenv("STOREFRONT_LOG_DIR", Path(__file__).parent.parent / "logs"))


def get_log_file() -> Path:
    """Today's event log file (created lazily)."""
    return LOG_DIR / f"storefront_events_{datetime.now().strftime('%Y%m%d')}.jsonl"


def log_event(event_type: str, data: Dict[str, Any]) -> None:
    """Append a structured event to the JSONL event log.

    Args:
        event_type: Type of event (import_request, product_saved, order_created, etc.)
        data: Event-specific data to log
    """
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    log_entry = {"timestamp": datetime.now().isoformat(), "event_type": event_type, **data}
    with open(get_log_file(), "a", encoding="utf-8") as f:
        f.write(json.dumps(log_entry, ensure_ascii=False, default=str) + "\n")
