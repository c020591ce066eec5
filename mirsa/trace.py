# mirsa/trace.py
from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, BinaryIO, Dict, Optional

import orjson

LEVELS = ("INFO", "WARNING", "ERROR")


class Trace:
    """
    Verbose output, passed explicitly into every call that can report steps.

    Each event is one JSON line:
      {"ts": ..., "level": ..., "event": ..., "details": {...}}
    """

    def __init__(self, stream: Optional[BinaryIO] = None):
        self._stream = stream

    @classmethod
    def to_file(cls, path: str | Path) -> "Trace":
        return _FileTrace(Path(path))

    def _write(self, payload: bytes) -> None:
        stream = self._stream if self._stream is not None else sys.stderr.buffer
        stream.write(payload)
        stream.flush()

    def emit(self, event: str, level: str = "INFO", **details: Any) -> None:
        level = (level or "INFO").upper()
        if level not in LEVELS:
            level = "INFO"

        line: Dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "event": event,
            "details": details,
        }
        self._write(orjson.dumps(line, default=_jsonable) + b"\n")


class _FileTrace(Trace):
    def __init__(self, path: Path):
        super().__init__()
        self.path = path

    def _write(self, payload: bytes) -> None:
        with self.path.open("ab") as f:
            f.write(payload)


def _jsonable(obj: Any) -> Any:
    if isinstance(obj, (bytes, bytearray)):
        return obj.hex()
    if isinstance(obj, Path):
        return str(obj)
    raise TypeError


def emit(trace: Optional[Trace], event: str, level: str = "INFO", **details: Any) -> None:
    if trace is not None:
        trace.emit(event, level, **details)


def make_trace(verbose: bool, trace_file: Optional[str] = None) -> Optional[Trace]:
    if not verbose:
        return None
    if trace_file:
        return Trace.to_file(trace_file)
    return Trace()
