import json
import logging
import os
import time
import uuid
from typing import Any, Dict, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def get_log_dir() -> str:
    return os.environ.get("AI_BACKEND_LOG_DIR", "./ai_backend_logs")


def debug_enabled() -> bool:
    # read per call so values loaded from .env after import still apply
    return os.environ.get("AI_BACKEND_DEBUG", "").strip().lower() in ("1", "true", "yes", "on")


def save_debug_log(prefix: str, payload: Dict[str, Any], log_dir: Optional[str] = None) -> Optional[str]:
    """
    Write `payload` as a timestamped JSON file under the debug log directory.
    Returns the written path, or None if the write failed. Never raises.
    """
    target_dir = log_dir or get_log_dir()
    fname = f"{int(time.time())}_{uuid.uuid4().hex[:8]}_{prefix}.json"
    path = os.path.join(target_dir, fname)
    try:
        os.makedirs(target_dir, exist_ok=True)
        with open(path, "w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2, ensure_ascii=False, default=str)
    except OSError:
        logger.exception("Failed to write debug log %s", path)
        return None
    return path
