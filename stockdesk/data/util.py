from __future__ import annotations

from typing import Any, Literal

from .backends.json_backend import JsonDirRecordSource
from .backends.payload_backend import PayloadRecordSource
from .interface import RecordSource


def get_record_source(kind: Literal["payload", "json"] = "payload", **kwargs: Any) -> RecordSource:
    if kind == "payload":
        # Payloads already fetched by the host, passed as keyword collections
        return PayloadRecordSource(**kwargs)
    if kind == "json":
        # Reads saved REST responses from the configured snapshot folder
        return JsonDirRecordSource(**kwargs)
    raise ValueError(f"Unknown record source kind: {kind}")
