"""Weight table defaults and conversion to/from the stored config document"""

import math
from typing import Any, Dict, Mapping

from pawn_calculator.domain.exceptions import WeightTableFormatError
from pawn_calculator.domain.models import WeightTable

# Document field name -> WeightTable attribute
WEIGHT_MAP_FIELDS = {
    "vehicleWeights": "vehicle_weights",
    "usagePeriodWeights": "usage_period_weights",
    "checkWeights": "check_weights",
    "periodWeights": "period_weights",
    "repaymentConditionWeights": "repayment_condition_weights",
}

DEFAULT_WEIGHTS_DOCUMENT: Dict[str, Any] = {
    "initialRate": 2.5,
    "vehicleWeights": {"汽車": 1.0, "機車": 1.15},
    "usagePeriodWeights": {"1年": 1.0, "3年": 1.05, "5年": 1.1, "10年以上": 1.25},
    "checkWeights": {"支票": 1.0, "客票": 1.2},
    "periodWeights": {
        "1": 1.1,
        "3": 1.0,
        "6": 0.98,
        "12": 0.95,
        "24": 1.05,
        "36": 1.1,
        "48": 1.15,
        "60": 1.2,
        "72": 1.25,
    },
    "repaymentConditionWeights": {"本利攤還": 1.0, "先還利息": 1.1},
}


def _to_number(value: Any, where: str) -> float:
    # bool is an int subclass; a stored true/false is not a multiplier
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise WeightTableFormatError(f"{where} must be a number, got {value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise WeightTableFormatError(f"{where} must be finite")
    return number


def _to_weight_map(raw: Any, where: str) -> Dict[str, float]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise WeightTableFormatError(f"{where} must be a mapping")
    return {str(key): _to_number(value, f"{where}[{key}]") for key, value in raw.items()}


def weight_table_from_document(document: Mapping[str, Any]) -> WeightTable:
    """
    Parse a stored config document into a WeightTable snapshot.

    A document is only usable when it carries a truthy ``initialRate`` and
    ``vehicleWeights``; the remaining maps are optional and default to empty
    (every lookup against them is neutral).

    Raises:
        WeightTableFormatError: On missing required fields or non-numeric values
    """
    if not isinstance(document, Mapping):
        raise WeightTableFormatError("Weight document must be a mapping")
    if not document.get("initialRate") or not document.get("vehicleWeights"):
        raise WeightTableFormatError("Weight document requires initialRate and vehicleWeights")

    maps = {
        attr: _to_weight_map(document.get(doc_field), doc_field)
        for doc_field, attr in WEIGHT_MAP_FIELDS.items()
    }
    return WeightTable(initial_rate=_to_number(document["initialRate"], "initialRate"), **maps)


def weight_table_to_document(table: WeightTable) -> Dict[str, Any]:
    """Render a WeightTable in the stored camelCase document shape"""
    document: Dict[str, Any] = {"initialRate": table.initial_rate}
    for doc_field, attr in WEIGHT_MAP_FIELDS.items():
        document[doc_field] = dict(getattr(table, attr))
    return document


def default_weight_table() -> WeightTable:
    """Fresh copy of the documented fallback table"""
    return weight_table_from_document(DEFAULT_WEIGHTS_DOCUMENT)


def merge_weight_document(current: Mapping[str, Any], update: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Merge an admin update into a stored document.

    Scalars are replaced; weight maps are merged key by key so an update that
    names one label leaves the others untouched. Fields absent from the update
    keep their stored values.
    """
    merged: Dict[str, Any] = {
        key: dict(value) if isinstance(value, Mapping) else value
        for key, value in current.items()
    }
    for key, value in update.items():
        if value is None:
            continue
        if key in WEIGHT_MAP_FIELDS and isinstance(value, Mapping):
            existing = merged.get(key)
            base = dict(existing) if isinstance(existing, Mapping) else {}
            base.update(value)
            merged[key] = base
        else:
            merged[key] = value
    return merged
