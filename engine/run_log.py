"""engine.run_log

Small helpers for storing run logs.

A run log is JSON-serializable so it can be exported/imported later.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

from core.state import GameState, state_to_dict

RUN_EXPORT_VERSION = 1


def make_run_export(*, config: Dict[str, Any], initial_state: GameState, quarter_logs: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "version": RUN_EXPORT_VERSION,
        "config": dict(config),
        "initial_state": state_to_dict(initial_state),
        "quarter_logs": list(quarter_logs),
    }


def dumps_run_export(obj: Dict[str, Any]) -> str:
    return json.dumps(obj, ensure_ascii=False, indent=2, sort_keys=True)
