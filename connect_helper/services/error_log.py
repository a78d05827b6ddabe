"""
Bounded diagnostic log persisted in the settings store.

Entries are appended in order, oldest first. Once the log has grown past
``max_entries`` the oldest ``evict_count`` entries are dropped in one batch
before the next append, so the log never holds more than
``max_entries + 1`` entries.
"""

import traceback
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from ..config import ErrorLogConfig, get_config
from ..constants import TIMESTAMP_FORMAT
from ..storage.settings_store import SettingsStore
from ..utils.logger import get_logger
from ..utils.sanitizer import Sanitizer


def describe_exception(cause: BaseException) -> Dict[str, Any]:
    """
    Return the message and raise location of an exception.

    Exceptions that were never raised have no traceback and report line 0
    and an empty file.
    """
    frames = traceback.extract_tb(cause.__traceback__) if cause.__traceback__ else []
    if frames:
        line, file = frames[-1].lineno, frames[-1].filename
    else:
        line, file = 0, ""

    return {"error": str(cause), "line": line, "file": file}


class ErrorLog:
    """Append-only, batch-evicted error log."""

    def __init__(
        self,
        store: SettingsStore,
        log_name: Optional[str] = None,
        sanitizer: Optional[Sanitizer] = None,
        config: Optional[ErrorLogConfig] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        app_config = get_config()
        self.store = store
        self.log_name = log_name or app_config.storage.error_log_name
        self.sanitizer = sanitizer or Sanitizer()
        self.config = config or app_config.error_log
        self.clock = clock or datetime.now
        self.logger = get_logger()

    def build_entry(
        self, payload: Union[Mapping[str, Any], str], cause: Optional[BaseException] = None
    ) -> Dict[str, Any]:
        """
        Turn a payload into a sanitized log entry.

        Args:
            payload: Structured fields, or a plain message string
            cause: Exception whose message and location are merged in

        Returns:
            Entry with ``time`` always set and ``error``/``line``/``file``
            when a cause is given
        """
        if isinstance(payload, Mapping):
            entry = dict(self.sanitizer.clean(payload) or {})
        else:
            message = payload if isinstance(payload, str) else ("" if payload is None else str(payload))
            entry = {"message": self.sanitizer.clean(message)}

        entry["time"] = self.clock().strftime(TIMESTAMP_FORMAT)

        if cause is not None:
            entry.update(describe_exception(cause))

        return entry

    def append(
        self, payload: Union[Mapping[str, Any], str], cause: Optional[BaseException] = None
    ) -> bool:
        """
        Append one entry, evicting the oldest batch first when over the limit.

        Returns:
            Result of the settings write
        """
        entry = self.build_entry(payload, cause)
        max_entries = self.config.max_entries
        evict_count = self.config.evict_count

        def _apply(current: Any) -> List[Any]:
            log = list(current) if isinstance(current, list) else []
            if len(log) > max_entries:
                log = log[evict_count:]
            log.append(entry)
            return log

        written = self.store.update(self.log_name, _apply, [])
        if not written:
            self.logger.warning(
                "Settings store rejected error log write", extra={"log_name": self.log_name}
            )
        return written

    def read(self) -> List[Any]:
        """Return the stored entries, or an empty list if absent or corrupted."""
        log = self.store.get(self.log_name, [])
        if not isinstance(log, list):
            return []
        return list(log)

    def clear(self) -> bool:
        """Drop every entry."""
        self.logger.info("Clearing error log", extra={"log_name": self.log_name})
        return self.store.set(self.log_name, [])
