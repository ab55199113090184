"""
File loaders for projection configs, actual records and risk registers.

Persistence belongs to the caller's store layer; these loaders exist so the
CLI and test fixtures can feed the engine from files. Nothing in
``weekly_forecaster.engine`` imports this module.

Supported formats
-----------------
Projection config   ``.toml`` or ``.json`` matching ``ProjectionConfig``.
Risk register       ``.json`` array of ``RiskItem`` objects.
Actual records      ``.json`` (array of ``ActualRecord`` objects) or
                    ``.csv`` with header row::

                        week,date,revenue,expenses,foot_traffic,notes
                        1,2025-03-07,1813,4007,,opening week

CSV carries headline figures only; use JSON for breakdowns and channel
performance.
"""

from __future__ import annotations

import csv
import json
import logging
import tomllib
from datetime import date
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from weekly_forecaster.engine.projection import parse_projection_config
from weekly_forecaster.models.actuals import ActualRecord, ActualsLedger
from weekly_forecaster.models.config import ProjectionConfig
from weekly_forecaster.models.risk import RiskItem

log = logging.getLogger(__name__)

_CSV_REQUIRED = ("week", "date", "revenue", "expenses")


def load_projection_config(
    path: Path,
    default_horizon_weeks: Optional[int] = None,
) -> ProjectionConfig:
    """Read a ``ProjectionConfig`` from a TOML or JSON file.

    ``default_horizon_weeks`` (usually ``[engine] default_horizon_weeks``)
    fills in ``horizon_weeks`` when the file leaves it out.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: Unsupported file extension.
        ConfigurationError: Payload fails model validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Projection config not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".toml":
        with open(path, "rb") as f:
            raw: dict[str, Any] = tomllib.load(f)
    elif suffix == ".json":
        raw = json.loads(path.read_text(encoding="utf-8"))
    else:
        raise ValueError(f"Unsupported projection config format '{suffix}' (use .toml or .json).")

    if default_horizon_weeks is not None and isinstance(raw, dict):
        raw.setdefault("horizon_weeks", default_horizon_weeks)
    config = parse_projection_config(raw)
    log.debug("Loaded projection config from %s (horizon=%d)", path, config.horizon_weeks)
    return config


def load_actuals(path: Path) -> ActualsLedger:
    """Read actual records from a JSON or CSV file into a ledger.

    Later rows for the same week replace earlier ones.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: Unsupported extension, bad CSV field, or invalid record.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Actuals file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".json":
        payload = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(payload, list):
            raise ValueError(f"{path}: expected a JSON array of actual records.")
        records = [_validate_record(item, i) for i, item in enumerate(payload)]
    elif suffix == ".csv":
        with path.open(newline="", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            missing = [c for c in _CSV_REQUIRED if c not in (reader.fieldnames or [])]
            if missing:
                raise ValueError(f"{path}: missing CSV columns {missing}.")
            records = [_parse_csv_row(row, i) for i, row in enumerate(reader, start=2)]
    else:
        raise ValueError(f"Unsupported actuals format '{suffix}' (use .json or .csv).")

    ledger = ActualsLedger.from_records(records)
    if len(ledger) < len(records):
        log.info("%s: %d duplicate week(s) replaced by later rows", path, len(records) - len(ledger))
    return ledger


def _validate_record(item: Any, index: int) -> ActualRecord:
    try:
        return ActualRecord.model_validate(item)
    except PydanticValidationError as exc:
        raise ValueError(f"Actual record at index {index} is invalid: {exc}") from exc


def _parse_csv_row(row: dict[str, str], line: int) -> ActualRecord:
    try:
        return ActualRecord(
            week=int(_req(row, "week")),
            date=date.fromisoformat(_req(row, "date")),
            revenue=float(_req(row, "revenue")),
            expenses=float(_req(row, "expenses")),
            foot_traffic=_opt_float(row, "foot_traffic"),
            notes=(row.get("notes") or "").strip() or None,
        )
    except (ValueError, PydanticValidationError) as exc:
        raise ValueError(f"CSV line {line}: {exc}") from exc


def _req(row: dict[str, str], key: str) -> str:
    v = (row.get(key) or "").strip()
    if not v:
        raise ValueError(f"Required field '{key}' is empty.")
    return v


def _opt_float(row: dict[str, str], key: str) -> Optional[float]:
    v = (row.get(key) or "").strip()
    return float(v) if v else None


def load_risks(path: Path) -> list[RiskItem]:
    """Read a risk register from a JSON array of ``RiskItem`` objects.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: Not a JSON array, or an entry is invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Risk register not found: {path}")
    if path.suffix.lower() != ".json":
        raise ValueError(f"Unsupported risk register format '{path.suffix}' (use .json).")

    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, list):
        raise ValueError(f"{path}: expected a JSON array of risks.")
    risks: list[RiskItem] = []
    for i, item in enumerate(payload):
        try:
            risks.append(RiskItem.model_validate(item))
        except PydanticValidationError as exc:
            raise ValueError(f"Risk at index {i} is invalid: {exc}") from exc
    return risks
