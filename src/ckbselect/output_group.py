"""
Output groups: cells that are always spent together.
"""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from ckbselect.fees import calculate_inputs_fee
from ckbselect.models import LiveCell


class InsufficientGroupValueError(Exception):
    """Raised when a group's capacity cannot cover the fee for spending it."""

    def __init__(self, value: int, fee: int):
        self.value = value
        self.fee = fee
        super().__init__(f"value: {value} is less than fee: {fee}")


class OutputGroup:
    """
    An immutable group of cells selected or skipped as a unit.

    All cells are assumed to be locked with secp256k1, so each one costs one
    input and one single-signature witness to spend.

    Args:
        outputs: Cells in the group. Each must carry an out_point; it is the
            final tie-break when ordering groups for selection.
        fee_rate: Current fee rate in shannons per 1000 bytes
        long_term_fee_rate: Fee rate expected when spending later. When None,
            long_term_fee is 0, which makes every fee paid now count fully as
            waste.

    Raises:
        ValueError: If outputs is empty
        InsufficientGroupValueError: If the cells' capacity is below their fee
    """

    __slots__ = ("_outputs", "_fee", "_value", "_effective_value", "_long_term_fee")

    def __init__(
        self,
        outputs: Iterable[LiveCell],
        fee_rate: int,
        long_term_fee_rate: int | None = None,
    ):
        cells = tuple(outputs)
        if not cells:
            raise ValueError("OutputGroup requires at least one cell")

        fee = calculate_inputs_fee(len(cells), fee_rate)
        value = sum((cell.capacity for cell in cells), 0)
        if value < fee:
            logger.debug(f"Rejecting group of {len(cells)} cells: value {value} < fee {fee}")
            raise InsufficientGroupValueError(value, fee)

        self._outputs = cells
        self._fee = fee
        self._value = value
        self._effective_value = value - fee
        self._long_term_fee = (
            0 if long_term_fee_rate is None else calculate_inputs_fee(len(cells), long_term_fee_rate)
        )

    @property
    def outputs(self) -> tuple[LiveCell, ...]:
        return self._outputs

    @property
    def fee(self) -> int:
        return self._fee

    @property
    def value(self) -> int:
        return self._value

    @property
    def effective_value(self) -> int:
        return self._effective_value

    @property
    def long_term_fee(self) -> int:
        return self._long_term_fee

    def sort_key(self) -> tuple[int, int, tuple[tuple[str, int], ...]]:
        """
        Descending effective value, then ascending fee, then out points.

        The out points make the order total, so selection does not depend on
        the order groups are passed in.
        """
        return (
            -self._effective_value,
            self._fee,
            tuple(cell.out_point.sort_key() for cell in self._outputs),
        )

    def __repr__(self) -> str:
        return (
            f"OutputGroup(cells={len(self._outputs)}, value={self._value}, "
            f"fee={self._fee}, effective_value={self._effective_value})"
        )
