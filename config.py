from __future__ import annotations

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    # Page path template; "{topic}" is replaced verbatim
    base_url: str = os.getenv("WIKISCRAPE_BASE_URL", "https://en.wikipedia.org/wiki/{topic}")
    # Read timeout for the single GET, in seconds
    timeout: float = float(os.getenv("WIKISCRAPE_TIMEOUT", "30"))
    # Log records go to stderr; stdout is reserved for the paragraph and notices
    log_level: str = os.getenv("WIKISCRAPE_LOG_LEVEL", "WARNING")


def get_settings() -> Settings:
    return Settings()
