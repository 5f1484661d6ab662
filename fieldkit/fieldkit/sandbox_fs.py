"""
Session log storage. Every path is resolved under a sandbox root and may not
leave it; the log itself is one SessionRecord per JSON line.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator

from .schema import SessionRecord

SESSION_LOG = "logs/sessions.jsonl"


class SandboxPathError(ValueError):
    pass


def resolve_in_sandbox(root: str | Path, rel: str | Path) -> Path:
    base = Path(root).resolve()
    target = (base / rel).resolve()
    if target != base and base not in target.parents:
        raise SandboxPathError(f"path escapes sandbox: {rel}")
    return target


def append_session(root: str | Path, record: SessionRecord, rel: str | Path = SESSION_LOG) -> Path:
    log_path = resolve_in_sandbox(root, rel)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    with log_path.open("a", encoding="utf-8") as f:
        f.write(record.model_dump_json() + "\n")
    return log_path


def read_sessions(root: str | Path, rel: str | Path = SESSION_LOG) -> Iterator[SessionRecord]:
    """Yield logged sessions in order. A malformed line raises ValueError naming its line number."""
    log_path = resolve_in_sandbox(root, rel)
    with log_path.open("r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                yield SessionRecord.model_validate_json(line)
            except ValueError as e:
                raise ValueError(f"{log_path.name}:{lineno}: bad session record ({e.__class__.__name__})") from e


def export_json(root: str | Path, rel: str | Path, obj: Any) -> Path:
    out_path = resolve_in_sandbox(root, rel)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(obj, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return out_path
