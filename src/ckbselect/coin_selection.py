"""
Cell selection for spending.

Implements the Branch and Bound algorithm designed by Murch, as used by
Bitcoin Core (src/wallet/coinselection.cpp), over CKB output groups. The
search looks for a set of groups whose effective value lands between the
target and the target plus the cost of a change output, so that no change
output is needed, and keeps the set with the least waste.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from loguru import logger

from ckbselect.config import Settings
from ckbselect.constants import MAX_MONEY, TOTAL_TRIES
from ckbselect.fees import calculate_change_output_fee, calculate_fixed_fee
from ckbselect.models import CellDep, CellOutput, LiveCell
from ckbselect.output_group import InsufficientGroupValueError, OutputGroup


@dataclass
class SelectionResult:
    """Result of cell selection"""

    success: bool
    outputs: list[LiveCell] = field(default_factory=list)
    total_value: int = 0
    waste: int | None = None
    tries: int = 0

    @classmethod
    def failed(cls, tries: int = 0) -> SelectionResult:
        return cls(success=False, tries=tries)


def select_coins_bnb(
    utxo_pool: Sequence[OutputGroup],
    target_value: int,
    cost_of_change: int,
    not_input_fees: int,
    total_tries: int = TOTAL_TRIES,
) -> SelectionResult:
    """
    Select output groups with Branch and Bound.

    Args:
        utxo_pool: Groups to choose from. The caller's sequence is not modified;
                   a copy is sorted by descending effective value.
        target_value: Value to pay, the lower bound of the accepted range
        cost_of_change: Cost of creating and spending a change output. This
                        plus the target is the upper bound of the range.
        not_input_fees: Fees for the outputs and fixed-size overhead
        total_tries: Maximum number of search iterations

    Returns:
        SelectionResult. On success, outputs holds the cells of the chosen
        groups and total_value the sum of their values (not effective values).
        On failure (insufficient funds, or no set found within the tries),
        outputs is empty and total_value is 0.

    Raises:
        ValueError: If total_tries is not positive
    """
    if total_tries <= 0:
        raise ValueError(f"total_tries must be positive, got {total_tries}")

    actual_target = not_input_fees + target_value

    curr_available_value = sum((group.effective_value for group in utxo_pool), 0)
    if curr_available_value < actual_target:
        logger.debug(
            f"BnB: insufficient funds, available {curr_available_value} < target {actual_target}"
        )
        return SelectionResult.failed()

    pool = sorted(utxo_pool, key=OutputGroup.sort_key)

    curr_value = 0
    curr_waste = 0
    curr_selection: list[bool] = []
    best_selection: list[bool] | None = None
    best_waste = MAX_MONEY

    # Fees above their long term estimate mean adding inputs only grows waste
    fees_above_long_term = bool(pool) and pool[0].fee > pool[0].long_term_fee

    tries = 0
    while tries < total_tries:
        tries += 1
        backtrack = False

        if (
            curr_value + curr_available_value < actual_target
            or curr_value > actual_target + cost_of_change
            or (curr_waste > best_waste and fees_above_long_term)
        ):
            backtrack = True
        elif curr_value >= actual_target:
            waste = curr_waste + (curr_value - actual_target)
            if waste <= best_waste:
                best_selection = curr_selection + [False] * (len(pool) - len(curr_selection))
                best_waste = waste
            backtrack = True

        if backtrack:
            # Walk back to the last included group whose omission branch is unexplored
            while curr_selection and not curr_selection[-1]:
                curr_selection.pop()
                curr_available_value += pool[len(curr_selection)].effective_value

            if not curr_selection:
                break

            curr_selection[-1] = False
            group = pool[len(curr_selection) - 1]
            curr_value -= group.effective_value
            curr_waste -= group.fee - group.long_term_fee
        else:
            depth = len(curr_selection)
            group = pool[depth]
            curr_available_value -= group.effective_value

            if (
                curr_selection
                and not curr_selection[-1]
                and group.effective_value == pool[depth - 1].effective_value
                and group.fee == pool[depth - 1].fee
            ):
                # Same as the group just excluded, so including it repeats that branch
                curr_selection.append(False)
            else:
                curr_selection.append(True)
                curr_value += group.effective_value
                curr_waste += group.fee - group.long_term_fee

    if best_selection is None:
        logger.debug(f"BnB: no selection found after {tries} tries")
        return SelectionResult.failed(tries)

    outputs: list[LiveCell] = []
    value_ret = 0
    for group, selected in zip(pool, best_selection):
        if selected:
            outputs.extend(group.outputs)
            value_ret += group.value

    logger.debug(
        f"BnB: selected {len(outputs)} cells worth {value_ret} "
        f"(waste {best_waste}) after {tries} tries"
    )
    return SelectionResult(
        success=True, outputs=outputs, total_value=value_ret, waste=best_waste, tries=tries
    )


class CoinSelector:
    """
    Groups live cells and runs Branch and Bound with fees derived from the
    transaction's outputs and deps.
    """

    def __init__(
        self,
        fee_rate: int,
        long_term_fee_rate: int | None = None,
        total_tries: int = TOTAL_TRIES,
    ):
        if fee_rate < 0:
            raise ValueError(f"Fee rate must be non-negative, got {fee_rate}")
        if long_term_fee_rate is not None and long_term_fee_rate < 0:
            raise ValueError(
                f"Long term fee rate must be non-negative, got {long_term_fee_rate}"
            )
        self.fee_rate = fee_rate
        self.long_term_fee_rate = long_term_fee_rate
        self.total_tries = total_tries

    @classmethod
    def from_settings(cls, settings: Settings) -> CoinSelector:
        return cls(
            fee_rate=settings.fee_rate,
            long_term_fee_rate=settings.long_term_fee_rate,
            total_tries=settings.total_tries,
        )

    def group_cells(
        self, cells: Iterable[LiveCell], group_by_lock: bool = False
    ) -> list[OutputGroup]:
        """
        Build output groups from live cells.

        Args:
            cells: Candidate cells
            group_by_lock: If True, cells sharing a lock script form one group
                           (spending one of them reveals the rest anyway).
                           Otherwise every cell is its own group.

        Returns:
            Groups that can pay for their own inputs. Groups that cannot are
            skipped with a warning.
        """
        buckets: list[list[LiveCell]]
        if group_by_lock:
            by_lock: dict[object, list[LiveCell]] = {}
            for cell in cells:
                by_lock.setdefault(cell.output.lock, []).append(cell)
            buckets = list(by_lock.values())
        else:
            buckets = [[cell] for cell in cells]

        groups = []
        for bucket in buckets:
            try:
                groups.append(OutputGroup(bucket, self.fee_rate, self.long_term_fee_rate))
            except InsufficientGroupValueError as e:
                logger.warning(f"Skipping {len(bucket)} cell(s) that cannot pay their fee: {e}")
        return groups

    def select(
        self,
        cells: Iterable[LiveCell],
        target_value: int,
        change_output: CellOutput,
        change_output_data: str | bytes = "0x",
        outputs: Sequence[CellOutput] = (),
        outputs_data: Sequence[str | bytes] = (),
        cell_deps: Sequence[CellDep] | int = (),
        header_deps: Sequence[str] | int = (),
        group_by_lock: bool = False,
    ) -> SelectionResult:
        """
        Select cells to pay target_value plus fees without needing change.

        Args:
            cells: Candidate cells
            target_value: Capacity to pay to the outputs, in shannons
            change_output: The change output that would be added otherwise;
                           its fee sets the accepted overshoot
            change_output_data: Data of the change output
            outputs: Outputs of the transaction being built
            outputs_data: Data of those outputs
            cell_deps: Cell deps, or their count
            header_deps: Header deps, or their count
            group_by_lock: See group_cells()
        """
        groups = self.group_cells(cells, group_by_lock=group_by_lock)
        cost_of_change = calculate_change_output_fee(
            change_output, change_output_data, self.fee_rate
        )
        not_input_fees = calculate_fixed_fee(
            cell_deps, header_deps, outputs, outputs_data, self.fee_rate
        )
        logger.debug(
            f"Selecting from {len(groups)} groups: target {target_value}, "
            f"cost of change {cost_of_change}, fixed fee {not_input_fees}"
        )
        return select_coins_bnb(
            groups,
            target_value,
            cost_of_change,
            not_input_fees,
            total_tries=self.total_tries,
        )
