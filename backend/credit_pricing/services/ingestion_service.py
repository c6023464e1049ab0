import logging
import re
from io import BytesIO
from pathlib import Path
from typing import BinaryIO

import pandas as pd
from sqlalchemy.orm import Session

from credit_pricing.services.errors import IngestionError, ValidationError
from credit_pricing.services.row_repository import insert_rows

logger = logging.getLogger(__name__)

FIELD_ALIASES: dict[str, list[str]] = {
    "email": ["email", "emailaddress"],
    "name": ["name", "fullname", "customername"],
    "credit_score": ["creditscore", "score"],
    "credit_lines": ["creditlines", "lines", "numcreditlines"],
    "masked_phone_number": ["maskedphonenumber", "maskedphone", "phonenumber", "phone"],
}

NUMERIC_FIELDS = ("credit_score", "credit_lines")


def normalize(col: str) -> str:
    return re.sub(r"[^a-z0-9]", "", str(col).lower())


def map_columns(columns) -> dict[str, str]:
    """
    Map CSV headers to row fields. Returns {field: header}; the first header
    matching a field wins, the rest stay unmapped.
    """
    lookup = {alias: field for field, aliases in FIELD_ALIASES.items() for alias in aliases}
    mapping: dict[str, str] = {}
    for col in columns:
        field = lookup.get(normalize(col))
        if field is not None and field not in mapping:
            mapping[field] = col
    return mapping


def read_csv(stream: BinaryIO | bytes) -> pd.DataFrame:
    if isinstance(stream, (bytes, bytearray)):
        stream = BytesIO(stream)
    try:
        df = pd.read_csv(
            stream,
            dtype=str,
            keep_default_na=False,
            encoding="utf-8-sig",
        )
    except pd.errors.EmptyDataError as exc:
        raise IngestionError("Empty file: a header row is required") from exc
    except (pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise IngestionError(f"Failed to parse file: {exc}") from exc
    return df.reset_index(drop=True)


def _numeric_values(df: pd.DataFrame, column: str) -> list[float | None]:
    raw = df[column].str.strip()
    values = pd.to_numeric(raw.where(raw != ""), errors="coerce")
    bad = raw.ne("") & (values.isna() | values.abs().eq(float("inf")))
    if bad.any():
        first = int(bad.idxmax())
        raise ValidationError(
            f"Row {first + 1}: column '{column}' value {df.at[first, column]!r} is not a number"
        )
    return [None if pd.isna(v) else float(v) for v in values]


def _text_or_none(value: str) -> str | None:
    return value if value != "" else None


def parse_rows(df: pd.DataFrame) -> list[dict]:
    """
    Turn the parsed frame into CreditRow keyword dicts.

    Missing numeric columns and empty numeric cells are stored as None.
    """
    mapping = map_columns(df.columns)
    mapped_headers = set(mapping.values())
    extra_headers = [c for c in df.columns if c not in mapped_headers]

    numeric = {
        field: _numeric_values(df, mapping[field])
        for field in NUMERIC_FIELDS
        if field in mapping
    }

    rows = []
    for position, record in enumerate(df.to_dict(orient="records")):
        row: dict = {}
        for field in FIELD_ALIASES:
            if field in numeric:
                row[field] = numeric[field][position]
            elif field in mapping:
                row[field] = _text_or_none(record[mapping[field]])
            else:
                row[field] = None
        row["extra"] = {str(col): _text_or_none(record[col]) for col in extra_headers}
        rows.append(row)
    return rows


def upload(db: Session, stream: BinaryIO | bytes) -> dict:
    df = read_csv(stream)
    rows = parse_rows(df)
    stored = insert_rows(db, rows)
    logger.info("UPLOAD: rows=%s columns=%s", stored, list(df.columns))
    return {"storedCount": stored}


def ingest_file(db: Session, path: str | Path) -> dict:
    with open(path, "rb") as fh:
        return upload(db, fh)
