from __future__ import annotations

import csv
import io
import json
import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from . import config


def current_timestamp() -> str:
    ts = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return ts.replace("+00:00", "Z")


def append_jsonl(path: Path, record: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as fh:
        fh.write(json.dumps(record, ensure_ascii=False) + "\n")
        fh.flush()


def read_jsonl(path: Path) -> List[Dict[str, Any]]:
    if not path.exists():
        return []
    records: List[Dict[str, Any]] = []
    with path.open("r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line:
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError:
                continue
    return records


def session_log_path(session_id: str) -> Path:
    return config.DATA_DIR / f"session_{session_id}.jsonl"


def flatten_record_for_csv(record: Dict[str, Any]) -> Dict[str, Any]:
    flat = dict.fromkeys(config.SCHEMA_COLUMNS, None)
    for key, value in record.items():
        if key in flat:
            flat[key] = value
    return flat


def build_csv_content(records: List[Dict[str, Any]]) -> Optional[str]:
    if not records:
        return None
    rows = [flatten_record_for_csv(rec) for rec in records]
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(config.SCHEMA_COLUMNS), extrasaction="ignore")
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return buffer.getvalue()


def _format_value_preview(value: Optional[Any]) -> str:
    if value is None:
        return "-"
    if isinstance(value, float):
        text = f"{value:.3f}".rstrip("0").rstrip(".")
        return text if text and text != "-0" else "0"
    return str(value)


def format_preview_message(record: Dict[str, Any]) -> str:
    event = record.get("event", "event")
    if event == "param_change":
        param = record.get("param_name", "?")
        old_v = _format_value_preview(record.get("old_value"))
        new_v = _format_value_preview(record.get("new_value"))
        source = record.get("source", "source")
        return f"param_change: {param} {old_v} -> {new_v} ({source})"
    if event in {"point_add", "point_remove"}:
        label = record.get("label", "?")
        x = _format_value_preview(record.get("x"))
        y = _format_value_preview(record.get("y"))
        return f"{event}: {label} ({x}, {y})"
    if event == "condition":
        return f"condition: {record.get('condition', '?')}"
    if event == "graph_select":
        return f"graph_select: {record.get('graph_type', '?')}"
    if event == "zoom_end":
        return f"zoom_end: {_format_value_preview(record.get('zoom_scale'))}x"
    if event == "reset":
        return "reset: workspace restored"
    return event


class InteractionLog:
    """Structured interaction records, kept in memory and optionally appended to JSONL.

    With ``persist=True`` and no explicit ``path`` the session file lives under
    ``config.DATA_DIR``.

    High-frequency drag frames go through :meth:`record_throttled`: inside the
    rate-limit window only the newest record is held back, and :meth:`flush`
    writes it out. Nothing runs in the background.
    """

    def __init__(
        self,
        session_id: Optional[str] = None,
        path: Optional[Path] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        rate_limit: float = config.LOG_RATE_LIMIT_SECONDS,
        persist: bool = False,
    ) -> None:
        self.session_id = session_id or uuid.uuid4().hex
        if path is None and persist:
            path = session_log_path(self.session_id)
        self.path = Path(path) if path is not None else None
        self._clock = clock
        self._rate_limit = rate_limit
        self._started = clock()
        self._seq = 0
        self._records: List[Dict[str, Any]] = []
        self._preview: List[str] = []
        self._pending: Optional[Dict[str, Any]] = None
        self._last_write: Optional[float] = None

    def record(
        self,
        event: str,
        *,
        param_name: Optional[str] = None,
        old_value: Optional[Any] = None,
        new_value: Optional[Any] = None,
        source: str = "system",
        params: Optional[Dict[str, float]] = None,
        view: Optional[Dict[str, float]] = None,
        extras: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        self.flush()
        record = self._build(event, param_name, old_value, new_value, source, params, view, extras)
        self._write(record)
        return record

    def record_throttled(self, event: str, **kwargs: Any) -> Dict[str, Any]:
        now = self._clock()
        record = self._build(
            event,
            kwargs.get("param_name"),
            kwargs.get("old_value"),
            kwargs.get("new_value"),
            kwargs.get("source", "system"),
            kwargs.get("params"),
            kwargs.get("view"),
            kwargs.get("extras"),
        )
        if self._last_write is None or now - self._last_write >= self._rate_limit:
            self._pending = None
            self._write(record)
        else:
            # coalesced frames keep the value the burst started from
            if self._pending is not None:
                record["old_value"] = self._pending.get("old_value")
            self._pending = record
        return record

    def flush(self) -> None:
        pending, self._pending = self._pending, None
        if pending is not None:
            self._write(pending)

    @property
    def pending(self) -> Optional[Dict[str, Any]]:
        return self._pending

    def records(self) -> List[Dict[str, Any]]:
        return list(self._records)

    def preview(self) -> List[str]:
        return list(self._preview)

    def csv_content(self) -> Optional[str]:
        self.flush()
        return build_csv_content(self._records)

    def _build(
        self,
        event: str,
        param_name: Optional[str],
        old_value: Optional[Any],
        new_value: Optional[Any],
        source: str,
        params: Optional[Dict[str, float]],
        view: Optional[Dict[str, float]],
        extras: Optional[Dict[str, Any]],
    ) -> Dict[str, Any]:
        record: Dict[str, Any] = {
            "schema_version": config.SCHEMA_VERSION,
            "session_id": self.session_id,
            "t_server_iso": current_timestamp(),
            "elapsed_time_ms": int((self._clock() - self._started) * 1000),
            "event": event,
            "param_name": param_name,
            "old_value": old_value,
            "new_value": new_value,
            "source": source,
            "mode": config.APP_MODE,
            "interaction_phase": config.DEFAULT_INTERACTION_PHASE,
        }
        if params:
            record.update(params)
        if view:
            record.update(view)
        if extras:
            record.update(extras)
        return record

    def _write(self, record: Dict[str, Any]) -> None:
        self._seq += 1
        record["seq"] = self._seq
        self._last_write = self._clock()
        self._records.append(record)
        self._preview = (self._preview + [format_preview_message(record)])[-config.LOG_PREVIEW_CAPACITY:]
        if self.path is None:
            return
        try:
            append_jsonl(self.path, record)
        except OSError as exc:
            print("[graph-lab-log]", exc, record)
