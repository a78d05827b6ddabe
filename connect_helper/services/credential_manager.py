"""
Service for managing this install's connection credentials.

All credential fields live in one record stored under a single settings key.
Getters read the whole record and project one field; setters read the
record, change one field and write the whole record back. Through a plain
`SettingsStore` that sequence is not atomic and concurrent writers can lose
each other's changes; wrap the store in `AtomicSettingsStore` to serialise.
"""

import re
from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Optional

from ..config import get_config
from ..constants import TIMESTAMP_FORMAT, CredentialField, plan_timestamp_key
from ..schemas.connect_schemas import ConnectPlan
from ..storage.settings_store import SettingsStore
from ..utils.hash_utils import hash_api_key
from ..utils.logger import get_logger

_INT_PREFIX_RE = re.compile(r"^\s*([+-]?\d+)")
_FALSY_FLAGS = (0, "", "0")


def coerce_int(value: Any) -> int:
    """
    Coerce a stored or supplied value to an integer.

    Numeric strings use their leading integer part ("12abc" is 12); values
    with no integer prefix become 0.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        try:
            return int(value)
        except (ValueError, OverflowError):
            return 0
    if isinstance(value, (str, bytes)):
        text = value.decode("utf-8", "ignore") if isinstance(value, bytes) else value
        match = _INT_PREFIX_RE.match(text)
        return int(match.group(1)) if match else 0
    return 1 if value else 0


def _is_flag_set(value: Any) -> bool:
    return not (value is False or value in _FALSY_FLAGS)


class CredentialManager:
    """
    Reads and writes the credential record.

    This service provides:
    - Typed accessors for every credential field
    - Hashed API key derivation for comparison and display
    - Plan lifecycle with first-seen timestamps that are never overwritten
    - Migration group correlation
    """

    def __init__(
        self,
        store: SettingsStore,
        options_name: Optional[str] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize with a settings store.

        Args:
            store: Settings store holding the record
            options_name: Settings key of the record (default: from config)
            clock: Returns the current time, used for plan timestamps
        """
        self.store = store
        self.options_name = options_name or get_config().storage.options_name
        self.clock = clock or datetime.now
        self.logger = get_logger()

    # ==================== RECORD ACCESS ====================

    def get_record(self) -> Dict[str, Any]:
        """Return a copy of the whole record; a corrupted value reads as empty."""
        record = self.store.get(self.options_name, {})
        if not isinstance(record, Mapping):
            self.logger.warning(
                "Credential record is not a mapping, treating it as empty",
                extra={"options_name": self.options_name, "stored_type": type(record).__name__},
            )
            return {}
        return dict(record)

    def _write(self, mutate: Callable[[Dict[str, Any]], None], field: str) -> bool:
        def _apply(current: Any) -> Dict[str, Any]:
            record = dict(current) if isinstance(current, Mapping) else {}
            mutate(record)
            return record

        written = self.store.update(self.options_name, _apply, {})
        if written:
            self.logger.debug("Credential record updated", extra={"field": field})
        else:
            self.logger.warning(
                "Settings store rejected credential record write",
                extra={"options_name": self.options_name, "field": field},
            )
        return written

    def _set_field(self, field: str, value: Any) -> bool:
        def _assign(record: Dict[str, Any]) -> None:
            record[field] = value

        return self._write(_assign, field)

    def get_field(self, key: str, default: Any = "") -> Any:
        """
        Loosely typed field read.

        - Boolean default: a present key reads as False when it holds 0,
          "0" or "", True otherwise; an absent key returns the default.
        - Empty scalar default: returns "" unless the stored value is non-empty.
        - Otherwise: the stored value when non-empty, else the default.

        Prefer the typed accessors, which do not depend on the default's type.
        """
        if isinstance(default, bool):
            return self.get_bool(key, default)

        if isinstance(default, (dict, list)) or default:
            value = default
        else:
            value = ""

        stored = self.get_record().get(key)
        if stored:
            value = stored

        return value

    def get_str(self, key: str, default: str = "") -> str:
        """Return a non-empty string or number field as a string, else the default."""
        value = self.get_record().get(key)
        if isinstance(value, str) and value:
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value:
            return str(value)
        return default

    def get_int(self, key: str, default: int = 0) -> int:
        """Return a field coerced to int, or the default when empty."""
        value = self.get_record().get(key)
        return coerce_int(value) if value else default

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Return a flag field; 0, "0" and "" read as False."""
        record = self.get_record()
        if record.get(key) is None:
            return default
        return _is_flag_set(record[key])

    def get_mapping(self, key: str, default: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Return a non-empty mapping field, else a copy of the default."""
        value = self.get_record().get(key)
        if isinstance(value, Mapping) and value:
            return dict(value)
        return dict(default or {})

    # ==================== IDENTITY ====================

    def get_api_key(self, default: str = "") -> str:
        return self.get_str(CredentialField.API_KEY.value, default)

    def set_api_key(self, api_key: str) -> bool:
        return self._set_field(CredentialField.API_KEY.value, api_key)

    def get_hashed_api_key(self) -> str:
        """
        Return the SHA-256 hex digest of the API key secret.

        Returns:
            Digest of the part after the first "|" (or of the whole key), or
            "" when no API key is stored
        """
        return hash_api_key(self.get_api_key())

    def get_connect_id(self) -> int:
        return self.get_int(CredentialField.CONNECT_ID.value)

    def set_connect_id(self, connect_id: Any) -> bool:
        """Store the connect ID, coerced to an integer."""
        return self._set_field(CredentialField.CONNECT_ID.value, coerce_int(connect_id))

    def get_connect_uuid(self) -> str:
        return self.get_str(CredentialField.CONNECT_UUID.value)

    def set_connect_uuid(self, connect_uuid: str) -> bool:
        return self._set_field(CredentialField.CONNECT_UUID.value, connect_uuid)

    def get_origin(self) -> str:
        return self.get_str(CredentialField.ORIGIN.value)

    def set_origin(self, origin: str) -> bool:
        return self._set_field(CredentialField.ORIGIN.value, origin)

    def get_jwt(self) -> str:
        return self.get_str(CredentialField.JWT.value)

    def set_jwt(self, jwt: str) -> bool:
        return self._set_field(CredentialField.JWT.value, jwt)

    def get_response(self) -> Dict[str, Any]:
        """Return the last stored connect response, or an empty mapping."""
        return self.get_mapping(CredentialField.RESPONSE.value)

    def set_response(self, response: Mapping[str, Any]) -> bool:
        return self._set_field(CredentialField.RESPONSE.value, dict(response))

    def get_api_domain(self) -> str:
        return self.get_str(CredentialField.API_URL.value)

    def set_api_domain(self, api_domain: str = "") -> bool:
        """Store an API domain override; an empty value clears the override."""
        return self._set_field(CredentialField.API_URL.value, api_domain)

    def auth_headers(self) -> Dict[str, str]:
        """Bearer authorization header for the stored JWT, if any."""
        jwt = self.get_jwt()
        return {"Authorization": f"Bearer {jwt}"} if jwt else {}

    # ==================== MIGRATION GROUP ====================

    def get_migration_group(self) -> str:
        return self.get_str(CredentialField.GROUP_UUID.value)

    def set_migration_group(self, group_uuid: str) -> bool:
        return self._set_field(CredentialField.GROUP_UUID.value, group_uuid)

    def has_migration_group(self, group_uuid: str) -> bool:
        """True when ``group_uuid`` is non-empty and equals the stored group."""
        if not group_uuid:
            return False
        return group_uuid == self.get_migration_group()

    # ==================== PLAN ====================

    def _now(self) -> str:
        return self.clock().strftime(TIMESTAMP_FORMAT)

    def set_plan(self, plan_id: Any) -> bool:
        """
        Activate a plan, or deactivate the current one.

        A non-empty plan ID becomes the active plan; its first-seen timestamp
        is stamped only if that plan never had one. An empty plan ID removes
        the active plan but keeps every recorded timestamp.

        Returns:
            Result of the settings write
        """
        if plan_id:
            timestamp_key = plan_timestamp_key(plan_id)
            now = self._now()

            def _activate(record: Dict[str, Any]) -> None:
                if record.get(timestamp_key) is None:
                    record[timestamp_key] = now
                record[CredentialField.PLAN_ID.value] = plan_id

            written = self._write(_activate, CredentialField.PLAN_ID.value)
            if written:
                self.logger.info("Connect plan set", extra={"plan_id": plan_id})
            return written

        def _deactivate(record: Dict[str, Any]) -> None:
            record.pop(CredentialField.PLAN_ID.value, None)

        written = self._write(_deactivate, CredentialField.PLAN_ID.value)
        if written:
            self.logger.info("Connect plan cleared")
        return written

    def remove_plan(self) -> bool:
        """
        Remove the active plan together with its timestamp.

        Returns:
            False without writing when no plan is active, else the write result
        """
        plan_id = self.get_record().get(CredentialField.PLAN_ID.value)
        if not plan_id:
            return False

        def _remove(record: Dict[str, Any]) -> None:
            # Re-read inside the update so an atomic store removes the plan it sees
            current = record.pop(CredentialField.PLAN_ID.value, None)
            if current:
                record.pop(plan_timestamp_key(current), None)

        written = self._write(_remove, CredentialField.PLAN_ID.value)
        if written:
            self.logger.info("Connect plan removed", extra={"plan_id": plan_id})
        return written

    def get_plan(self) -> Dict[str, Any]:
        """
        Return the active plan.

        Returns:
            ``{}`` when no plan is active, else ``{"plan_id", "plan_timestamp"}``
        """
        record = self.get_record()
        plan_id = record.get(CredentialField.PLAN_ID.value)
        if not plan_id:
            return {}

        timestamp = record.get(plan_timestamp_key(plan_id))
        return ConnectPlan(
            plan_id=str(plan_id),
            plan_timestamp=str(timestamp) if timestamp else "",
        ).model_dump()

    def get_plan_id(self) -> str:
        return self.get_plan().get("plan_id", "")
