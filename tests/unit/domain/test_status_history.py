"""Tests for the append-only status history."""
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.entities import StatusHistory
from core.domain.value_objects import StatusType

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_empty_history_is_rejected():
    with pytest.raises(ValueError):
        StatusHistory([])


def test_current_is_last_entry():
    history = StatusHistory.start(StatusType.PROCESSING_IN_MERCHANT, T0)
    history.append(StatusType.WAITING_FOR_COURIER, T0 + timedelta(minutes=1))

    assert history.current() is StatusType.WAITING_FOR_COURIER
    assert history[0].type is StatusType.PROCESSING_IN_MERCHANT
    assert len(history) == 2


def test_append_keeps_earlier_entries():
    history = StatusHistory.start(StatusType.PROCESSING_IN_MERCHANT, T0)
    entry = history.append(StatusType.WAITING_FOR_COURIER, T0)

    assert list(history)[-1] == entry
    assert [e.type for e in history] == [StatusType.PROCESSING_IN_MERCHANT, StatusType.WAITING_FOR_COURIER]
