"""engine.decisions

Parse an untrusted decision body (e.g. a decoded JSON request) into a
DecisionInput.

Type problems (missing field, non-numeric, NaN/inf) raise InvalidDecisionInput.
Range problems are NOT errors here: core.effects.sanitize_decision clamps them.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Mapping

from core.errors import InvalidDecisionInput
from core.state import DecisionInput

DECISION_FIELDS = ("price", "new_engineers", "new_sales_staff", "salary_pct")


def _as_number(x: Any) -> float:
    # bool is an int subclass; a checkbox value is not a price.
    if isinstance(x, bool):
        raise ValueError("boolean")
    try:
        if isinstance(x, (int, float)):
            v = float(x)
        elif isinstance(x, str) and x.strip():
            v = float(x.strip())
        else:
            raise ValueError("not a number")
    except OverflowError as exc:
        # ints beyond float range, e.g. a JSON literal like 1e400 written as digits
        raise ValueError("out of float range") from exc
    if not math.isfinite(v):
        raise ValueError("not finite")
    return v


def decision_from_mapping(raw: Any) -> DecisionInput:
    if not isinstance(raw, Mapping):
        raise InvalidDecisionInput("decision body must be an object", DECISION_FIELDS)

    values: Dict[str, float] = {}
    missing: List[str] = []
    bad: List[str] = []
    for name in DECISION_FIELDS:
        if raw.get(name) is None:
            missing.append(name)
            continue
        try:
            values[name] = _as_number(raw[name])
        except ValueError:
            bad.append(name)

    if missing or bad:
        parts = []
        if missing:
            parts.append(f"missing: {', '.join(missing)}")
        if bad:
            parts.append(f"not a finite number: {', '.join(bad)}")
        raise InvalidDecisionInput("invalid decision (" + "; ".join(parts) + ")", missing + bad)

    return DecisionInput(**values)
