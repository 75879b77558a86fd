from __future__ import annotations

import logging

import pandas as pd

from .config import DEFAULT_DATA_CONFIG, DataConfig
from .models import Advocate

logger = logging.getLogger(__name__)

_advocates: list[Advocate] | None = None


def _load(config: DataConfig) -> list[Advocate]:
    df = pd.read_csv(
        config.roster_path,
        dtype={"id": str, "phone_number": str},
        keep_default_na=False,
    )

    # Specialties are stored as a single separated column; keep their order
    df["specialties_list"] = df["specialties"].apply(
        lambda s: tuple(t.strip() for t in str(s).split(config.specialty_separator) if t.strip())
    )

    advocates: list[Advocate] = []
    for _, row in df.iterrows():
        advocates.append(Advocate(
            id=row["id"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            city=row["city"],
            degree=row["degree"],
            specialties=row["specialties_list"],
            years_of_experience=int(row["years_of_experience"]),
            phone_number=row["phone_number"],
        ))

    ids = [a.id for a in advocates]
    if len(set(ids)) != len(ids):
        raise ValueError(f"Duplicate advocate ids in {config.roster_path}")

    logger.info("Loaded %d advocates from %s", len(advocates), config.roster_path)
    return advocates


def get_advocates(config: DataConfig = DEFAULT_DATA_CONFIG) -> list[Advocate]:
    """Return the in-memory advocate roster, loading it on first call."""
    global _advocates
    if _advocates is None:
        _advocates = _load(config)
    return _advocates


def reset_advocates() -> None:
    global _advocates
    _advocates = None
