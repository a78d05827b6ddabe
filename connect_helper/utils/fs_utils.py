"""Filesystem helpers used in connect diagnostics."""

import os
from typing import Dict, Union

from .logger import get_logger

logger = get_logger()


def get_directory_info(path: Union[str, os.PathLike]) -> Dict[str, int]:
    """
    Return the total byte size and file count under a directory.

    Entries that cannot be stat'ed are skipped. A missing path reports zeros.

    Args:
        path: Directory to walk

    Returns:
        Dictionary with "size" (bytes) and "count" (files)
    """
    bytes_total = 0
    files_total = 0

    real_path = os.path.realpath(path)
    if not os.path.exists(real_path):
        return {"size": bytes_total, "count": files_total}

    def _on_walk_error(error: OSError) -> None:
        logger.debug("Skipping unreadable directory", extra={"path": error.filename})

    for root, _dirs, files in os.walk(real_path, onerror=_on_walk_error):
        for file_name in files:
            try:
                bytes_total += os.path.getsize(os.path.join(root, file_name))
            except OSError:
                continue
            files_total += 1

    return {"size": bytes_total, "count": files_total}
