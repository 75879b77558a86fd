from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class ClientConfig:
    base_url: str = os.getenv("ADVOCATE_API_URL", "http://localhost:8000")
    advocates_path: str = "/api/advocates"
    recommend_path: str = "/api/recommend"
    quiet_period: float = 0.3  # seconds of input stability before filtering
    timeout: float = 30.0


DEFAULT_CLIENT_CONFIG = ClientConfig()
