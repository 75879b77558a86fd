from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

_DEFAULT_CSV = Path(__file__).resolve().parent.parent / "data" / "advocates.csv"


@dataclass(frozen=True)
class DataConfig:
    roster_path: Path = Path(os.getenv("ADVOCATES_CSV", str(_DEFAULT_CSV)))
    specialty_separator: str = "|"


DEFAULT_DATA_CONFIG = DataConfig()
