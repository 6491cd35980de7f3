"""
Utility modules for unity-auditor.

- formatting: Byte sizes and project-relative paths
- meta: Readers for Unity .meta side files
"""

from unity_auditor.utils.formatting import format_bytes, relative_posix
from unity_auditor.utils.meta import meta_path, read_meta, read_meta_guid

__all__ = [
    "format_bytes",
    "relative_posix",
    "meta_path",
    "read_meta",
    "read_meta_guid",
]
