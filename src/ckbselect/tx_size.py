"""
Serialized size of the parts of a CKB transaction.

Each function returns how many bytes one more item of that kind adds to a
transaction, so a transaction's size can be estimated before it is built.
"""

from __future__ import annotations

from ckbselect.constants import (
    CELL_DEP_SIZE,
    CELL_OUTPUT_FIXED_SIZE,
    HEADER_DEP_SIZE,
    INPUT_SIZE,
    NUMBER_SIZE,
    SCRIPT_FIXED_SIZE,
    SECP_WITNESS_SIZE,
)
from ckbselect.models import CellOutput, Script, hex_to_bytes


def input_size() -> int:
    """Size of one CellInput."""
    return INPUT_SIZE


def secp_witness_size() -> int:
    """Size of one witness holding a secp256k1 signature in WitnessArgs.lock."""
    return SECP_WITNESS_SIZE


def cell_dep_size() -> int:
    return CELL_DEP_SIZE


def header_dep_size() -> int:
    return HEADER_DEP_SIZE


def script_size(script: Script) -> int:
    return SCRIPT_FIXED_SIZE + script.args_size


def output_size(output: CellOutput) -> int:
    """
    Size of one CellOutput, including its offset in the outputs vector.

    The type script is optional and costs nothing when absent.
    """
    size = CELL_OUTPUT_FIXED_SIZE + script_size(output.lock)
    if output.type_script is not None:
        size += script_size(output.type_script)
    return size + NUMBER_SIZE


def output_data_size(data: str | bytes) -> int:
    """
    Size of one outputs_data entry: the data, its length prefix and its offset.

    Args:
        data: 0x-prefixed hex string or raw bytes

    Raises:
        ValueError: If a hex string is malformed
    """
    if isinstance(data, str):
        data = hex_to_bytes(data)
    return len(data) + NUMBER_SIZE + NUMBER_SIZE
