from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from ..core.constants import LOCAL_KEY_PREFIX


class LocalStore:
    """Key-value side-store persisted as one JSON document.

    Keys are namespaced with a prefix so several apps can share a file.
    With no path the store lives in memory only.
    """

    def __init__(self, path: Optional[str | Path] = None, *, prefix: str = LOCAL_KEY_PREFIX):
        self._path = Path(path) if path else None
        self._prefix = prefix
        self._data: Dict[str, Any] = self._load()

    def _load(self) -> Dict[str, Any]:
        if not self._path or not self._path.exists():
            return {}
        raw = self._path.read_text(encoding="utf-8")
        return json.loads(raw) if raw.strip() else {}

    def _flush(self) -> None:
        if not self._path:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(self._data, ensure_ascii=False, indent=2), encoding="utf-8")

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(f"{self._prefix}{key}", default)

    def set(self, key: str, value: Any) -> None:
        self._data[f"{self._prefix}{key}"] = value
        self._flush()

    def remove(self, key: str) -> None:
        self._data.pop(f"{self._prefix}{key}", None)
        self._flush()

    def clear(self) -> None:
        for key in [k for k in self._data if k.startswith(self._prefix)]:
            del self._data[key]
        self._flush()
