from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

import numpy as np
import pandas as pd

from nutrition.config import ALL_CATEGORIES, CALORIE_CAP, DATA_DIR, DATA_FILE_NAME


logger = logging.getLogger(__name__)

# Source header -> record field. The sugar header carries a leading space in the published menu file.
SOURCE_COLUMNS: Dict[str, str] = {
    "Beverage_category": "category",
    "Beverage": "name",
    "Beverage_prep": "prep",
    "Calories": "calories",
    " Sugars (g)": "sugar",
    "Caffeine (mg)": "caffeine",
}
TEXT_FIELDS = ["category", "name", "prep"]
NUMERIC_FIELDS = ["calories", "sugar", "caffeine"]
RECORD_COLUMNS = TEXT_FIELDS + NUMERIC_FIELDS


class MissingColumnsError(KeyError):
    """Raised when the source file header lacks one of the required columns."""


@dataclass(frozen=True)
class BeverageRecord:
    category: str
    name: str
    prep: str
    calories: float
    sugar: float
    caffeine: Optional[float] = None


@dataclass(frozen=True, eq=False)
class BeverageDataset:
    """Cleaned menu rows, loaded once and treated as read-only afterwards."""

    frame: pd.DataFrame
    records: Tuple[BeverageRecord, ...]
    categories: Tuple[str, ...]
    caffeine_extent: Optional[Tuple[float, float]]

    def __len__(self) -> int:
        return len(self.records)

    @property
    def empty(self) -> bool:
        return not self.records


def get_source_file() -> Path:
    return DATA_DIR / DATA_FILE_NAME


def file_signature(path: Path) -> Tuple[str, float]:
    return (str(path), path.stat().st_mtime)


def numeric_column(series: pd.Series) -> pd.Series:
    """Coerce a text column to float; blanks, text and non-finite values become NaN."""
    text = series.astype(object).where(series.notna(), "").map(lambda v: str(v).strip())
    values = pd.to_numeric(text, errors="coerce").astype("float64")
    return values.where(np.isfinite(values))


def clean_rows(raw: pd.DataFrame) -> pd.DataFrame:
    df = raw.reindex(columns=list(SOURCE_COLUMNS)).rename(columns=SOURCE_COLUMNS)
    for col in TEXT_FIELDS:
        df[col] = df[col].where(df[col].notna(), "").astype(str)
    for col in NUMERIC_FIELDS:
        df[col] = numeric_column(df[col])

    df = df.dropna(subset=["calories", "sugar"])
    df = df[df["calories"] <= CALORIE_CAP]
    return df[RECORD_COLUMNS].reset_index(drop=True)


def to_records(df: pd.DataFrame) -> List[BeverageRecord]:
    records: List[BeverageRecord] = []
    for row in df.itertuples(index=False):
        records.append(
            BeverageRecord(
                category=str(row.category),
                name=str(row.name),
                prep=str(row.prep),
                calories=float(row.calories),
                sugar=float(row.sugar),
                caffeine=None if pd.isna(row.caffeine) else float(row.caffeine),
            )
        )
    return records


def parse_row(row: Mapping[str, object]) -> Optional[BeverageRecord]:
    """Clean a single source row; None when the row would be dropped."""
    cleaned = clean_rows(pd.DataFrame([dict(row)]))
    if cleaned.empty:
        return None
    return to_records(cleaned)[0]


def caffeine_extent(df: pd.DataFrame) -> Optional[Tuple[float, float]]:
    caffeine = df["caffeine"].dropna() if "caffeine" in df.columns else pd.Series(dtype=float)
    if caffeine.empty:
        return None
    return float(caffeine.min()), float(caffeine.max())


def build_dataset(raw: pd.DataFrame) -> BeverageDataset:
    frame = clean_rows(raw)
    categories = tuple(sorted(frame["category"].unique().tolist()))
    return BeverageDataset(
        frame=frame,
        records=tuple(to_records(frame)),
        categories=categories,
        caffeine_extent=caffeine_extent(frame),
    )


def dataset_from_rows(rows: List[Mapping[str, object]]) -> BeverageDataset:
    return build_dataset(pd.DataFrame([dict(r) for r in rows], columns=list(SOURCE_COLUMNS)))


def read_source(path: Path) -> pd.DataFrame:
    raw = pd.read_csv(path, dtype=str, keep_default_na=False)
    missing = [c for c in SOURCE_COLUMNS if c not in raw.columns]
    if missing:
        raise MissingColumnsError(f"{path.name} is missing required columns: {missing}")
    return raw


@lru_cache(maxsize=4)
def _load_beverages_cached(file_sig: Tuple[str, float]) -> BeverageDataset:
    path = Path(file_sig[0])
    raw = read_source(path)
    dataset = build_dataset(raw)
    logger.info("Loaded %d beverages from %s (%d rows dropped)", len(dataset), path.name, len(raw) - len(dataset))
    return dataset


def load_beverages(path: Optional[Path] = None) -> BeverageDataset:
    path = Path(path) if path is not None else get_source_file()
    return _load_beverages_cached(file_signature(path))


def category_options(dataset: BeverageDataset) -> List[str]:
    return [ALL_CATEGORIES] + list(dataset.categories)
