"""
ckb-select CLI - Run cell selection against a list of live cells.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import typer
from loguru import logger
from pydantic import TypeAdapter, ValidationError

from ckbselect.coin_selection import CoinSelector, select_coins_bnb
from ckbselect.config import get_settings
from ckbselect.constants import COIN
from ckbselect.fees import calculate_change_output_fee
from ckbselect.models import CellOutput, LiveCell, Script

app = typer.Typer(
    name="ckb-select",
    help="CKB cell selection",
    add_completion=False,
)

_cells_adapter = TypeAdapter(list[LiveCell])


def setup_logging(level: str = "INFO") -> None:
    """Configure loguru logging."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )


def load_cells(path: Path) -> list[LiveCell]:
    """Load a JSON array of live cells."""
    return _cells_adapter.validate_json(path.read_text())


def format_ckb(shannons: int) -> str:
    return f"{shannons / COIN:.8f} CKB"


@app.command()
def select(
    cells_file: Path = typer.Argument(..., help="JSON file with an array of live cells"),
    target: int = typer.Option(..., "--target", "-t", help="Target capacity in shannons"),
    fee_rate: int | None = typer.Option(
        None, "--fee-rate", help="Shannons per 1000 bytes (default: from settings)"
    ),
    long_term_fee_rate: int | None = typer.Option(
        None, "--long-term-fee-rate", help="Long term fee rate (shannons per 1000 bytes)"
    ),
    cost_of_change: int | None = typer.Option(
        None,
        "--cost-of-change",
        help="Override the change cost (default: a change output with the first cell's lock)",
    ),
    not_input_fees: int = typer.Option(
        0, "--not-input-fees", help="Fees for outputs and fixed overhead in shannons"
    ),
    group_by_lock: bool = typer.Option(
        False, "--group-by-lock", help="Spend cells sharing a lock script together"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    log_level: str | None = typer.Option(None, "--log-level", "-l"),
) -> None:
    """Select cells covering a target with Branch and Bound."""
    settings = get_settings()
    setup_logging(log_level or settings.log_level)

    if not cells_file.exists():
        logger.error(f"Cells file not found: {cells_file}")
        raise typer.Exit(1)

    try:
        cells = load_cells(cells_file)
    except ValidationError as e:
        logger.error(f"Invalid cells file {cells_file}: {e}")
        raise typer.Exit(1)

    if not cells:
        logger.error("Cells file contains no cells")
        raise typer.Exit(1)

    try:
        selector = CoinSelector(
            fee_rate=settings.fee_rate if fee_rate is None else fee_rate,
            long_term_fee_rate=(
                settings.long_term_fee_rate if long_term_fee_rate is None else long_term_fee_rate
            ),
            total_tries=settings.total_tries,
        )
    except ValueError as e:
        logger.error(f"Invalid fee settings: {e}")
        raise typer.Exit(1)

    if cost_of_change is None:
        change_output = CellOutput(capacity=0, lock=cells[0].output.lock)
        cost_of_change = calculate_change_output_fee(change_output, "0x", selector.fee_rate)

    groups = selector.group_cells(cells, group_by_lock=group_by_lock)
    logger.info(f"Loaded {len(cells)} cells in {len(groups)} groups")

    result = select_coins_bnb(
        groups, target, cost_of_change, not_input_fees, total_tries=selector.total_tries
    )

    if as_json:
        typer.echo(
            json.dumps(
                {
                    "success": result.success,
                    "total_value": result.total_value,
                    "waste": result.waste,
                    "tries": result.tries,
                    "outputs": [
                        cell.model_dump(mode="json", by_alias=True) for cell in result.outputs
                    ],
                },
                indent=2,
            )
        )
    elif result.success:
        typer.echo(f"Selected {len(result.outputs)} cells")
        for cell in result.outputs:
            typer.echo(
                f"  {cell.out_point.tx_hash}:{cell.out_point.index}  {format_ckb(cell.capacity)}"
            )
        typer.echo(f"Total: {format_ckb(result.total_value)}")
        typer.echo(f"Waste: {result.waste} shannons ({result.tries} tries)")

    if not result.success:
        logger.error(f"No selection found for target {target} after {result.tries} tries")
        raise typer.Exit(1)

    logger.info(f"Selected {len(result.outputs)} cells worth {result.total_value}")


@app.command()
def change_fee(
    code_hash: str = typer.Option(..., "--code-hash", help="Lock script code hash"),
    args: str = typer.Option("0x", "--args", help="Lock script args"),
    data: str = typer.Option("0x", "--data", help="Change output data"),
    fee_rate: int | None = typer.Option(None, "--fee-rate", help="Shannons per 1000 bytes"),
    log_level: str | None = typer.Option(None, "--log-level", "-l"),
) -> None:
    """Print the fee for adding (and later spending) one change output."""
    settings = get_settings()
    setup_logging(log_level or settings.log_level)

    try:
        change_output = CellOutput(capacity=0, lock=Script(code_hash=code_hash, args=args))
        fee = calculate_change_output_fee(
            change_output, data, settings.fee_rate if fee_rate is None else fee_rate
        )
    except (ValidationError, ValueError) as e:
        logger.error(f"Invalid change output: {e}")
        raise typer.Exit(1)

    typer.echo(str(fee))


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
