"""
File-writing helpers shared by the tests.
"""

import json
from pathlib import Path


def write_meta(path: Path, guid: str, extra: str = "") -> None:
    """Write a minimal .meta file next to ``path``."""
    path.with_name(path.name + ".meta").write_text(
        f"fileFormatVersion: 2\nguid: {guid}\n{extra}", encoding="utf-8"
    )


def write_json(path: Path, data: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
