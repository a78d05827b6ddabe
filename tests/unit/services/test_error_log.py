"""Unit tests for the bounded error log."""

from unittest.mock import patch

import pytest

from connect_helper.config import ErrorLogConfig
from connect_helper.services.error_log import ErrorLog, describe_exception

LOG = "connect_helper_error_log"


def _raise(exc):
    raise exc


class TestAppend:
    """Test entry construction on append."""

    def test_string_payload_becomes_message(self, error_log):
        """Test a plain string is wrapped as the message."""
        assert error_log.append("Something <b>broke</b>") is True

        assert error_log.read() == [{"message": "Something broke", "time": "2024-05-17 09:30:15"}]

    def test_mapping_payload_is_sanitized(self, error_log):
        """Test every value of a structured payload is cleaned, keys untouched."""
        error_log.append(
            {
                "message": "  Remote\n\tfailure ",
                "details": {"status": 500, "body": "<script>x()</script>oops"},
                "retry": False,
            }
        )

        (entry,) = error_log.read()
        assert entry == {
            "message": "Remote failure",
            "details": {"status": "500", "body": "oops"},
            "retry": "",
            "time": "2024-05-17 09:30:15",
        }

    def test_time_overwrites_caller_value(self, error_log):
        """Test the stamped time replaces any supplied time."""
        error_log.append({"message": "m", "time": "yesterday"})

        assert error_log.read()[0]["time"] == "2024-05-17 09:30:15"

    def test_cause_merges_error_details(self, error_log):
        """Test a raised cause contributes message, line and file."""
        try:
            _raise(RuntimeError("boom"))
        except RuntimeError as e:
            cause = e

        error_log.append({"message": "failed", "error": "caller value"}, cause)

        (entry,) = error_log.read()
        assert entry["message"] == "failed"
        assert entry["error"] == "boom"
        assert entry["file"] == __file__
        assert isinstance(entry["line"], int) and entry["line"] > 0

    def test_unraised_cause_has_no_location(self):
        """Test an exception that was never raised reports line 0 and no file."""
        assert describe_exception(ValueError("bad")) == {"error": "bad", "line": 0, "file": ""}

    def test_append_returns_store_result(self, store, error_log):
        """Test a rejected write is surfaced as False."""
        with patch.object(store, "set", return_value=False):
            assert error_log.append("message") is False


class TestEviction:
    """Test the batched eviction policy."""

    def _seed(self, store, count):
        store.set(LOG, [{"message": str(i)} for i in range(count)])

    def test_no_eviction_up_to_limit(self, store, error_log):
        """Test a log of 150 grows to 151 without eviction."""
        self._seed(store, 150)

        error_log.append("new")

        log = error_log.read()
        assert len(log) == 151
        assert log[0]["message"] == "0"

    def test_eviction_drops_oldest_batch(self, store, error_log):
        """Test a log of 151 drops 50 entries and then appends: 102 entries."""
        self._seed(store, 151)

        error_log.append("new")

        log = error_log.read()
        assert len(log) == 102
        assert log[0]["message"] == "50"
        assert log[-1]["message"] == "new"

    def test_length_stays_bounded(self, error_log):
        """Test repeated appends never exceed max_entries + 1."""
        for i in range(400):
            error_log.append(f"entry {i}")
            assert len(error_log.read()) <= 151

        assert error_log.read()[-1]["message"] == "entry 399"

    def test_custom_limits(self, store, clock):
        """Test eviction follows the configured bounds."""
        log = ErrorLog(store, config=ErrorLogConfig(max_entries=3, evict_count=2), clock=clock)
        for i in range(4):
            log.append(str(i))

        log.append("4")

        assert [entry["message"] for entry in log.read()] == ["2", "3", "4"]


class TestRead:
    """Test reading and clearing."""

    def test_absent_log_reads_empty(self, error_log):
        """Test an absent log is an empty list."""
        assert error_log.read() == []

    @pytest.mark.parametrize("corrupted", ["text", {"a": 1}, 5])
    def test_corrupted_log_reads_empty(self, store, error_log, corrupted):
        """Test a non-list stored value reads as empty."""
        store.set(LOG, corrupted)

        assert error_log.read() == []

    def test_corrupted_log_is_replaced_on_append(self, store, error_log):
        """Test appending over a corrupted value starts a new log."""
        store.set(LOG, "text")

        error_log.append("first")

        assert len(error_log.read()) == 1

    def test_clear(self, error_log):
        """Test clear empties the log."""
        error_log.append("one")

        assert error_log.clear() is True
        assert error_log.read() == []
