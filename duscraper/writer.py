"""
Result writer.

Every pipeline ends here: one envelope, one JSON file, fully overwritten
on each run.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping


def write_envelope(path: str | Path, envelope: Mapping[str, Any]) -> Path:
    """
    Write an envelope as 2-space indented UTF-8 JSON.

    Creates parent directories if needed and overwrites an existing file.
    OSError (unwritable filesystem) is left to the caller.
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)

    out.write_text(json.dumps(envelope, indent=2, ensure_ascii=False), encoding="utf-8")
    return out
