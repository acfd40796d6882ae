"""
Test configuration for ckbselect tests.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from ckbselect.models import CellOutput, LiveCell, OutPoint, Script
from ckbselect.output_group import OutputGroup

SECP_CODE_HASH = "0x9bd7e06f3ecf4be0f2fcd2188b23f1b9fcc88e5d4b65a8637b17723bbda3cce8"


def make_lock(args: str = "0x" + "11" * 20) -> Script:
    return Script(code_hash=SECP_CODE_HASH, hash_type="type", args=args)


def make_cell(capacity: int, index: int = 0, lock: Script | None = None) -> LiveCell:
    return LiveCell(
        out_point=OutPoint(tx_hash="0x" + f"{index:064x}", index=index),
        output=CellOutput(capacity=capacity, lock=lock or make_lock()),
    )


@pytest.fixture
def secp_lock() -> Script:
    return make_lock()


@pytest.fixture
def cell_factory() -> Callable[..., LiveCell]:
    return make_cell


@pytest.fixture
def group_factory() -> Callable[..., OutputGroup]:
    """Build single-cell groups; fee_rate 0 makes effective value equal capacity."""
    counter = iter(range(1, 1_000_000))

    def _make(capacity: int, fee_rate: int = 0, long_term_fee_rate: int | None = None):
        return OutputGroup([make_cell(capacity, next(counter))], fee_rate, long_term_fee_rate)

    return _make
