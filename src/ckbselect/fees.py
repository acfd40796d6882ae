"""
Fee calculation for CKB transactions.

Fee rates are in shannons per 1000 bytes. Fees are rounded up so a
transaction never pays below its fee rate.
"""

from __future__ import annotations

from collections.abc import Sequence

from ckbselect import tx_size
from ckbselect.constants import FEE_RATE_DENOMINATOR
from ckbselect.models import CellDep, CellOutput


def calculate_transaction_fee(size: int, fee_rate: int) -> int:
    """
    Convert a byte size into a fee at the given fee rate.

    Args:
        size: Size in bytes
        fee_rate: Shannons per 1000 bytes

    Returns:
        Fee in shannons, rounded up

    Raises:
        ValueError: If size or fee_rate is negative
    """
    if size < 0:
        raise ValueError(f"Size must be non-negative, got {size}")
    if fee_rate < 0:
        raise ValueError(f"Fee rate must be non-negative, got {fee_rate}")

    base = size * fee_rate
    return -(-base // FEE_RATE_DENOMINATOR)


def calculate_inputs_fee(count: int, fee_rate: int) -> int:
    """Fee for spending `count` secp256k1-locked cells (input plus witness each)."""
    size = (tx_size.input_size() + tx_size.secp_witness_size()) * count
    return calculate_transaction_fee(size, fee_rate)


def calculate_change_output_fee(
    change_output: CellOutput, change_output_data: str | bytes, fee_rate: int
) -> int:
    """
    Fee for creating a change output now and spending it later.

    Covers the output, its data, and the input and witness needed to spend it.
    """
    size = (
        tx_size.output_size(change_output)
        + tx_size.output_data_size(change_output_data)
        + tx_size.input_size()
        + tx_size.secp_witness_size()
    )
    return calculate_transaction_fee(size, fee_rate)


def _count(items: Sequence[object] | int) -> int:
    return items if isinstance(items, int) else len(items)


def calculate_fixed_fee(
    cell_deps: Sequence[CellDep] | int,
    header_deps: Sequence[str] | int,
    outputs: Sequence[CellOutput],
    outputs_data: Sequence[str | bytes],
    fee_rate: int,
) -> int:
    """
    Fee for the parts of a transaction that do not depend on input selection.

    Args:
        cell_deps: Cell deps, or their count
        header_deps: Header dep hashes, or their count
        outputs: Transaction outputs
        outputs_data: Data for each output
        fee_rate: Shannons per 1000 bytes

    Returns:
        Fee in shannons; 0 when every collection is empty
    """
    size = (
        tx_size.cell_dep_size() * _count(cell_deps)
        + tx_size.header_dep_size() * _count(header_deps)
        + sum((tx_size.output_size(output) for output in outputs), 0)
        + sum((tx_size.output_data_size(data) for data in outputs_data), 0)
    )
    return calculate_transaction_fee(size, fee_rate)
