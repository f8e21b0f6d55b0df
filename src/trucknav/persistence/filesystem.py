"""File-based storage for explicitly saved route results."""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..config import settings

_UNSAFE = re.compile(r"[^A-Za-z0-9_-]+")


class FileStorage:
    """Saved route results, one timestamped directory per save under ``<root>/routes``."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.export_root).resolve()
        self.output_root = self.root / "routes"
        self.output_root.mkdir(parents=True, exist_ok=True)

    def make_run_directory(self, prefix: str = "route") -> Path:
        safe_prefix = _UNSAFE.sub("_", prefix).strip("_") or "route"
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        path = self.output_root / f"{safe_prefix}_{stamp}"
        path.mkdir(exist_ok=False)
        return path

    def write_json(self, path: Path, data: Any) -> None:
        path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")

    def write_csv(self, path: Path, content: str) -> None:
        # csv output already carries \r\n terminators
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)
