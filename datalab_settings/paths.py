from __future__ import annotations

import os
import re
import stat
from pathlib import Path
from typing import Optional

from .log import SettingsLog

_SEPARATORS = re.compile(r"[\\/]+" if os.sep == "\\" else r"/+")


def join_content_dir(datalab_root: str, content_dir: str) -> str:
    """Join non-empty segments and normalize; an absolute ``content_dir`` stays under the root."""

    joined = os.sep.join(segment for segment in (datalab_root, content_dir) if segment)
    if not joined:
        return "."
    return os.path.normpath(_SEPARATORS.sub(lambda _: os.sep, joined))


def ensure_dir_exists(full_path: Path | str, log: Optional[SettingsLog] = None) -> bool:
    """Create ``full_path`` and any missing ancestors, root first.

    Returns False (creating nothing) when some path on the way exists but is not a
    directory. Symlinks count as non-directories.
    """

    log = log or SettingsLog()
    path = Path(full_path)
    if path.parent == path:
        return True
    if path.exists():
        if not stat.S_ISDIR(path.lstat().st_mode):
            log.debug("Path %s is not a directory", path)
            return False
        return True
    if not ensure_dir_exists(path.parent, log):
        return False
    path.mkdir()
    return True
