"""Small helpers for serialization and spreadsheet cell coercion."""

from __future__ import annotations

import dataclasses
import math
import re
from datetime import date, datetime
from typing import Any

import numpy as np
import pandas as pd


_NUMERIC_TEXT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def make_json_safe(obj: Any) -> Any:
    """Recursively convert values into JSON-serializable forms."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        if hasattr(obj, "to_dict"):
            return make_json_safe(obj.to_dict())
        return make_json_safe(dataclasses.asdict(obj))

    if isinstance(obj, dict):
        out = {}
        for key, value in obj.items():
            if isinstance(key, (pd.Timestamp, datetime)):
                safe_key = key.strftime("%Y-%m-%d %H:%M:%S")
            elif isinstance(key, (int, float, str, bool, type(None))):
                safe_key = key
            else:
                safe_key = str(key)
            out[safe_key] = make_json_safe(value)
        return out

    if isinstance(obj, (list, tuple)):
        return [make_json_safe(item) for item in obj]

    if isinstance(obj, pd.DataFrame):
        return make_json_safe(obj.to_dict("records"))

    if isinstance(obj, pd.Series):
        return {str(k): make_json_safe(v) for k, v in obj.to_dict().items()}

    if isinstance(obj, np.ndarray):
        return make_json_safe(obj.tolist())

    if isinstance(obj, np.bool_):
        return bool(obj)

    if isinstance(obj, np.integer):
        return int(obj)

    if isinstance(obj, np.floating):
        obj = float(obj)

    if isinstance(obj, float):
        return obj if math.isfinite(obj) else None

    if isinstance(obj, (pd.Timestamp, datetime)):
        return obj.strftime("%Y-%m-%d %H:%M:%S")

    if isinstance(obj, date):
        return obj.isoformat()

    if isinstance(obj, (int, str, bool, type(None))):
        return obj

    try:
        if pd.isna(obj):
            return None
    except (TypeError, ValueError):
        pass

    return str(obj)


def _to_float(value: Any) -> float | None:
    """Coerce one spreadsheet cell to a finite float.

    Blank strings, booleans, NaN/inf and anything ``float()`` rejects come
    back as ``None``. Text must be a plain decimal with an optional exponent
    (no ``1_000``, ``nan`` or ``inf`` spellings).
    """
    if value is None or isinstance(value, (bool, np.bool_)):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not _NUMERIC_TEXT.fullmatch(value):
            return None
    try:
        numeric = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(numeric):
        return None
    return numeric
