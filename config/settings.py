"""
Configuration. All settings from env vars (or a .env file).
No YAML. No TOML parsing. Just a dataclass with defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path

# Auto-load .env file so you don't need `export $(grep ...)` every time
from dotenv import load_dotenv
load_dotenv()

GAP_POLICIES = ("ask", "replay", "fast-forward")


@dataclass
class Config:
    # Hacker News Firebase API
    api_base: str = os.environ.get("HNPULL_API_BASE", "https://hacker-news.firebaseio.com/v0")
    user_agent: str = os.environ.get("HNPULL_USER_AGENT", "hn-pull/0.1")

    # HTTP behaviour. Retries back off as retry_backoff * 2**attempt seconds.
    request_timeout: float = float(os.environ.get("HNPULL_REQUEST_TIMEOUT", "15"))
    max_retries: int = int(os.environ.get("HNPULL_MAX_RETRIES", "4"))
    retry_backoff: float = float(os.environ.get("HNPULL_RETRY_BACKOFF", "1.0"))

    # Storage: holds only the last processed item ID
    db_path: Path = Path(os.environ.get("HNPULL_DB_PATH", "data/hn-pull.db"))

    # ── Poller pacing ──
    # Backlog larger than this asks before replaying
    gap_threshold: int = int(os.environ.get("HNPULL_GAP_THRESHOLD", "100"))
    # Pause after the gap decision so Ctrl+C can still abort
    grace_period: float = float(os.environ.get("HNPULL_GRACE_PERIOD", "3"))
    # Wait between checks once caught up with the newest item
    idle_interval: float = float(os.environ.get("HNPULL_IDLE_INTERVAL", "120"))

    # "ask" | "replay" | "fast-forward"
    gap_policy: str = os.environ.get("HNPULL_GAP_POLICY", "ask")

    def __post_init__(self):
        if self.gap_policy not in GAP_POLICIES:
            raise ValueError(
                f"HNPULL_GAP_POLICY must be one of {', '.join(GAP_POLICIES)}, got '{self.gap_policy}'"
            )


def load_config() -> Config:
    return Config()
