"""
Readers for Unity ``.meta`` side files.
"""

import logging
import re
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

GUID_PATTERN = re.compile(r"^guid:\s*([0-9a-fA-F]+)\s*$", re.MULTILINE)


def meta_path(asset_path: Union[str, Path]) -> Path:
    asset_path = Path(asset_path)
    return asset_path.with_name(asset_path.name + ".meta")


def read_meta(asset_path: Union[str, Path]) -> Optional[str]:
    """Text of the asset's .meta file, or None when absent or unreadable."""
    path = meta_path(asset_path)
    if not path.is_file():
        return None
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning(f"Could not read {path}: {e}")
        return None


def read_meta_guid(asset_path: Union[str, Path]) -> Optional[str]:
    """GUID recorded in the asset's .meta file."""
    content = read_meta(asset_path)
    if content is None:
        return None
    match = GUID_PATTERN.search(content)
    return match.group(1).lower() if match else None
