"""
ckbselect - Cell selection for CKB wallets

Provides transaction size estimation, fee calculation and Branch and Bound
selection of the cells to spend.
"""

__version__ = "0.1.0"

from ckbselect.coin_selection import CoinSelector, SelectionResult, select_coins_bnb
from ckbselect.constants import COIN, MAX_MONEY, TOTAL_TRIES
from ckbselect.fees import (
    calculate_change_output_fee,
    calculate_fixed_fee,
    calculate_inputs_fee,
    calculate_transaction_fee,
)
from ckbselect.models import CellDep, CellOutput, LiveCell, OutPoint, Script
from ckbselect.output_group import InsufficientGroupValueError, OutputGroup

__all__ = [
    "COIN",
    "CellDep",
    "CellOutput",
    "CoinSelector",
    "InsufficientGroupValueError",
    "LiveCell",
    "MAX_MONEY",
    "OutPoint",
    "OutputGroup",
    "Script",
    "SelectionResult",
    "TOTAL_TRIES",
    "calculate_change_output_fee",
    "calculate_fixed_fee",
    "calculate_inputs_fee",
    "calculate_transaction_fee",
    "select_coins_bnb",
]
