import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

DEFAULT_ROOT = "."
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def load_env(env_path: Optional[Path] = None) -> bool:
    """Load .env from the working directory if present.
    Variables already set in the environment take precedence.
    """
    if env_path is None:
        env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return False
    return load_dotenv(dotenv_path=env_path, override=False)


def _split_patterns(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [p.strip() for p in raw.split(",") if p.strip()]


def load_settings() -> Dict[str, Any]:
    """Read ZONESWEEP_* variables into a settings dict."""
    log_dir = os.getenv("ZONESWEEP_LOG_DIR")
    level = (os.getenv("ZONESWEEP_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    return {
        "root": os.getenv("ZONESWEEP_ROOT") or DEFAULT_ROOT,
        "log_level": level if level in LOG_LEVELS else DEFAULT_LOG_LEVEL,
        "log_dir": Path(log_dir) if log_dir else None,
        "extra_excludes": _split_patterns(os.getenv("ZONESWEEP_EXCLUDE")),
    }
