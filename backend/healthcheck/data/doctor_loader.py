"""
Doctor Directory Loader

Loads doctors.csv from data/ (or DOCTORS_CSV_PATH), provides search and
lookup functions for the doctor directory.

Data is lazy-loaded on first access and cached in memory.
"""

import pandas as pd
from pathlib import Path

from healthcheck.config import DOCTORS_CSV_PATH

_DATA_DIR = Path(__file__).resolve().parent.parent.parent.parent / "data"

_COLUMNS = [
    "doctor_id", "name", "specialty", "hospital", "city",
    "phone", "email", "experience_years", "rating",
]

# Module-level cache
_doctors: pd.DataFrame | None = None


def _csv_path() -> Path:
    return Path(DOCTORS_CSV_PATH) if DOCTORS_CSV_PATH else _DATA_DIR / "doctors.csv"


def _load_doctors(path: Path) -> pd.DataFrame:
    """Load and clean the directory CSV."""
    df = pd.read_csv(path, usecols=_COLUMNS, dtype=str, encoding="utf-8-sig")

    df = df.dropna(subset=["doctor_id", "name", "specialty"])
    df = df.drop_duplicates(subset=["doctor_id"], keep="first")

    for col in ["name", "specialty", "hospital", "city", "phone", "email"]:
        df[col] = df[col].fillna("").str.strip()
    df["specialty"] = df["specialty"].str.title()

    df["experience_years"] = pd.to_numeric(df["experience_years"], errors="coerce").fillna(0).astype(int)
    df["rating"] = pd.to_numeric(df["rating"], errors="coerce").fillna(0.0).round(1)

    return df.reset_index(drop=True)


def _ensure_loaded() -> pd.DataFrame:
    global _doctors

    if _doctors is None:
        _doctors = _load_doctors(_csv_path())
    return _doctors


def reset_cache() -> None:
    global _doctors
    _doctors = None


def _row_to_dict(row) -> dict:
    return {
        "doctor_id": row["doctor_id"],
        "name": row["name"],
        "specialty": row["specialty"],
        "hospital": row["hospital"],
        "city": row["city"],
        "phone": row["phone"],
        "email": row["email"],
        "experience_years": int(row["experience_years"]),
        "rating": float(row["rating"]),
    }


def get_specialties() -> list[str]:
    """Return sorted list of specialties present in the directory."""
    df = _ensure_loaded()
    return sorted(df["specialty"].unique().tolist())


def search_doctors(specialty: str | None = None, city: str | None = None) -> list[dict]:
    """Search the directory, case-insensitive on specialty and city.

    Results are ordered by rating (best first), then name.
    """
    df = _ensure_loaded()

    if specialty:
        df = df[df["specialty"].str.lower() == specialty.strip().lower()]
    if city:
        df = df[df["city"].str.lower() == city.strip().lower()]

    df = df.sort_values(["rating", "name"], ascending=[False, True])

    return [_row_to_dict(row) for _, row in df.iterrows()]


def get_doctor(doctor_id: str) -> dict | None:
    df = _ensure_loaded()

    rows = df[df["doctor_id"] == doctor_id]
    if rows.empty:
        return None
    return _row_to_dict(rows.iloc[0])
