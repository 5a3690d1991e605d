from datetime import datetime, timezone
from itertools import count

import pytest

from timeledger.ledger import TimeLedger


@pytest.fixture
def fixed_now():
    return datetime(2025, 10, 23, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def ledger(fixed_now):
    ids = count(1)
    return TimeLedger(break_hours=0.5, id_factory=lambda: f"te-{next(ids)}", clock=lambda: fixed_now)
