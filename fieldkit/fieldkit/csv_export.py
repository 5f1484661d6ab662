from __future__ import annotations

import csv
from datetime import datetime, timezone
from typing import Dict, Iterable

from .schema import LeafNode, SessionRecord, TraversalState


CSV_HEADERS = [
    "final_node_id",
    "severity",
    "title",
    "action_item",
    "steps",
    "path",
    "timestamp",
]


def _ts() -> str:
    return datetime.now(timezone.utc).isoformat()


def session_record(state: TraversalState, leaf: LeafNode) -> SessionRecord:
    return SessionRecord(
        path=list(state.history) + [state.current_node_id],
        final_node_id=leaf.id,
        title=leaf.result.title,
        severity=leaf.result.severity,
        action_item=leaf.result.action_item,
        timestamp=_ts(),
    )


def _row(rec: SessionRecord) -> Dict[str, object]:
    return {
        "final_node_id": rec.final_node_id,
        "severity": rec.severity,
        "title": rec.title,
        "action_item": rec.action_item,
        "steps": max(len(rec.path) - 1, 0),
        "path": "|".join(rec.path),
        "timestamp": rec.timestamp,
    }


def to_csv(records: Iterable[SessionRecord], out_path: str) -> None:
    with open(out_path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=CSV_HEADERS)
        w.writeheader()
        for rec in records:
            w.writerow(_row(rec))
