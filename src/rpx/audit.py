"""Dual-write audit trail: JSONL file + SQLite database."""

from __future__ import annotations

import getpass
import os
import sqlite3
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator

from rpx.config import get_config
from rpx.models import AuditEvent
from rpx.settings import RpxConfig

_SCHEMA = """
CREATE TABLE IF NOT EXISTS audit_logs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    timestamp TEXT NOT NULL,
    host_id TEXT NOT NULL,
    actor TEXT NOT NULL,
    action TEXT NOT NULL,
    target TEXT NOT NULL DEFAULT '',
    params TEXT NOT NULL DEFAULT '{}',
    result TEXT NOT NULL DEFAULT 'success',
    state TEXT,
    error TEXT,
    duration_ms INTEGER
);
CREATE INDEX IF NOT EXISTS idx_audit_timestamp ON audit_logs(timestamp);
CREATE INDEX IF NOT EXISTS idx_audit_target ON audit_logs(target);
"""


def _ensure_dirs(cfg: RpxConfig) -> None:
    cfg.log_dir.mkdir(parents=True, exist_ok=True)
    cfg.audit_db_path.parent.mkdir(parents=True, exist_ok=True)


def _get_actor() -> str:
    # Under sudo, record who actually ran the tool.
    return os.environ.get("SUDO_USER") or getpass.getuser()


def _init_db(db_path: Path) -> sqlite3.Connection:
    conn = sqlite3.connect(str(db_path))
    conn.executescript(_SCHEMA)
    return conn


def _write_jsonl(path: Path, event: AuditEvent) -> None:
    with open(path, "a") as f:
        f.write(event.to_jsonl() + "\n")


def _write_sqlite(db_path: Path, event: AuditEvent) -> None:
    conn = _init_db(db_path)
    try:
        conn.execute(
            """INSERT INTO audit_logs
               (timestamp, host_id, actor, action, target, params, result, state, error, duration_ms)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                event.timestamp.isoformat(),
                event.host_id,
                event.actor,
                event.action,
                event.target,
                event.model_dump_json(include={"params"}),
                event.result,
                event.state,
                event.error,
                event.duration_ms,
            ),
        )
        conn.commit()
    finally:
        conn.close()


def log_event(event: AuditEvent) -> None:
    """Write an audit event to both JSONL and SQLite."""
    cfg = get_config()
    _ensure_dirs(cfg)
    _write_jsonl(cfg.audit_jsonl_path, event)
    _write_sqlite(cfg.audit_db_path, event)


@contextmanager
def audit(action: str, target: str = "", **params: Any) -> Generator[AuditEvent, None, None]:
    """Context manager that records timing and outcome.

    The body may downgrade ``event.result`` (e.g. to ``degraded``); an
    exception always records ``failure``.
    """
    cfg = get_config()
    event = AuditEvent(
        host_id=cfg.host_id,
        actor=_get_actor(),
        action=action,
        target=target,
        params=params,
    )
    start = time.monotonic()
    try:
        yield event
    except BaseException as exc:
        event.result = "failure"
        event.error = str(exc) or type(exc).__name__
        raise
    finally:
        event.duration_ms = int((time.monotonic() - start) * 1000)
        log_event(event)
