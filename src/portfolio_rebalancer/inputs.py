"""
Input boundary: turns user-supplied text into validated engine input.

Everything that parses strings or rejects bad numbers lives here so the
calculator can stay a pure function over typed positions.
"""

import csv
import logging
import math
import re
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from rebalancer_config import ValidationConfig, get_config
from .exceptions import InvalidPositionError, ModeAmountError, PortfolioImportError, TargetAllocationError
from .models import Position, RebalanceMode, RebalanceRequest

logger = logging.getLogger(__name__)

RawValue = Union[str, int, float, None]


def _validation_config(config: Optional[ValidationConfig]) -> ValidationConfig:
    return config or get_config().validation


def _to_number(raw: RawValue, strip_chars: str) -> float:
    """Parse a number after removing decoration characters, rejecting nan/inf"""
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        value = float(raw)
    else:
        text = str(raw or "").strip()
        for ch in strip_chars:
            text = text.replace(ch, "")
        value = float(text)  # ValueError on garbage
    if not math.isfinite(value):
        raise ValueError(f"non-finite value {raw!r}")
    return value


def parse_amount(raw: RawValue) -> float:
    """Parse a dollar amount such as '$30,000' or '30000.50'"""
    return _to_number(raw, "$,")


def parse_percent(raw: RawValue) -> float:
    """Parse a percentage such as '60%' or '60'"""
    return _to_number(raw, "%")


def parse_position(ticker: str, amount: RawValue, target_percent: RawValue,
                   config: Optional[ValidationConfig] = None) -> Position:
    """
    Build a typed Position from raw strings.

    Raises:
        InvalidPositionError: If the ticker, amount or target cannot be used
    """
    config = _validation_config(config)
    ticker = (ticker or "").strip().upper()

    if not ticker or len(ticker) > config.max_ticker_length:
        raise InvalidPositionError(f'Invalid ticker "{ticker}"')

    try:
        amount_value = parse_amount(amount)
    except ValueError:
        raise InvalidPositionError(f'Invalid amount "{amount}"') from None
    if amount_value < 0:
        raise InvalidPositionError(f'Invalid amount "{amount}"')

    try:
        target_value = parse_percent(target_percent)
    except ValueError:
        raise InvalidPositionError(f'Invalid target "{target_percent}"') from None
    if target_value < 0 or target_value > config.max_target_percent:
        raise InvalidPositionError(f'Invalid target "{target_percent}"')

    return Position(ticker=ticker, amount=amount_value, target_percent=target_value)


def _collect(rows: Iterable[Tuple[int, Optional[Tuple[str, str, str]], Optional[str]]],
             config: ValidationConfig, empty_message: str) -> List[Position]:
    """Parse (line number, fields, error) rows, gathering every line error before raising"""
    positions: List[Position] = []
    errors: List[str] = []

    for line_no, fields, error in rows:
        if error:
            errors.append(f"Line {line_no}: {error}")
            continue
        try:
            positions.append(parse_position(*fields, config=config))
        except InvalidPositionError as e:
            errors.append(f"Line {line_no}: {e}")

    if not positions:
        raise PortfolioImportError(empty_message, errors)

    if errors:
        logger.warning(f"Import rejected: {len(errors)} invalid line(s)")
        raise PortfolioImportError("\n".join(errors), errors)

    logger.debug(f"Imported {len(positions)} positions")
    return positions


def parse_csv(text: str, config: Optional[ValidationConfig] = None) -> List[Position]:
    """
    Parse CSV rows of Ticker,Amount,Target%.

    A first line mentioning "ticker" is treated as a header. Amounts may be
    quoted to carry thousands separators.

    Raises:
        PortfolioImportError: If any line is invalid or nothing could be parsed
    """
    config = _validation_config(config)
    lines = text.strip().splitlines()
    start = 1 if lines and "ticker" in lines[0].lower() else 0

    def rows():
        for index in range(start, len(lines)):
            line = lines[index].strip()
            if not line:
                continue
            parts = [p.strip() for p in next(csv.reader([line]))]
            if len(parts) != 3:
                yield index + 1, None, "Expected 3 columns (Ticker,Amount,Target%)"
            else:
                yield index + 1, tuple(parts), None

    return _collect(rows(), config, "No valid positions found in file")


def parse_text(text: str, config: Optional[ValidationConfig] = None) -> List[Position]:
    """
    Parse pasted lines such as "VTI $30000 60%", "VTI 30000 60" or "VTI,30000,60".

    Raises:
        PortfolioImportError: If any line is invalid or nothing could be parsed
    """
    config = _validation_config(config)
    lines = text.strip().splitlines()

    def rows():
        for index, raw_line in enumerate(lines):
            line = raw_line.strip()
            if not line:
                continue
            if "," in line:
                parts = [p.strip() for p in line.split(",")]
                fields = parts if len(parts) == 3 else None
            else:
                parts = line.split()
                fields = parts[:3] if len(parts) >= 3 else None

            if not fields or not all(fields):
                yield index + 1, None, f'Could not parse "{line}"'
                continue

            ticker = re.sub(r"[^A-Z]", "", fields[0].upper())
            yield index + 1, (ticker, fields[1], fields[2]), None

    return _collect(rows(), config, "No valid positions found")


def validate_target_total(positions: Sequence[Position], tolerance: Optional[float] = None) -> float:
    """
    Check that target percentages add up to 100.

    Returns:
        The summed target percentage

    Raises:
        TargetAllocationError: If the sum is off by more than the tolerance
    """
    if tolerance is None:
        tolerance = get_config().validation.target_sum_tolerance

    total = sum(p.target_percent for p in positions)
    diff = total - 100
    if abs(diff) > tolerance:
        if diff > 0:
            message = (f"Your target allocations add up to {total:.2f}%, which is {abs(diff):.2f}% too high. "
                       f"Please reduce your target percentages so they add up to exactly 100%.")
        else:
            message = (f"Your target allocations add up to {total:.2f}%, which is {abs(diff):.2f}% too low. "
                       f"Please increase your target percentages so they add up to exactly 100%.")
        raise TargetAllocationError(message, total)
    return total


def _raw_field(row: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in row:
            return row[key]
    return None


def _is_blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


def prepare_request(raw_positions: Iterable[Mapping[str, Any]],
                    mode: Union[RebalanceMode, str] = RebalanceMode.STANDARD,
                    mode_amount: RawValue = None,
                    config: Optional[ValidationConfig] = None) -> RebalanceRequest:
    """
    Validate form input and build a RebalanceRequest for the calculator.

    Rows missing a ticker, amount or target are ignored. Rows accept either
    targetPercent or target_percent keys.

    Raises:
        InvalidPositionError: If no complete row exists, a row is invalid or the
            portfolio is worth nothing outside contribution mode
        TargetAllocationError: If targets do not add up to 100%
        UnknownModeError: If the mode is not recognised
        ModeAmountError: If a contribution/withdrawal amount is missing or too large
    """
    config = _validation_config(config)

    complete = []
    for row in raw_positions:
        ticker = _raw_field(row, "ticker")
        amount = _raw_field(row, "amount")
        target = _raw_field(row, "targetPercent", "target_percent")
        if _is_blank(ticker) or _is_blank(amount) or _is_blank(target):
            continue
        complete.append((ticker, amount, target))

    if not complete:
        raise InvalidPositionError("Please add at least one complete position")

    positions = []
    for index, (ticker, amount, target) in enumerate(complete, start=1):
        try:
            positions.append(parse_position(str(ticker), amount, target, config=config))
        except InvalidPositionError as e:
            raise InvalidPositionError(f"Position {index}: {e}") from e

    validate_target_total(positions, config.target_sum_tolerance)

    mode = RebalanceMode.parse(mode)
    amount_value = 0.0

    if mode in (RebalanceMode.CONTRIBUTION, RebalanceMode.WITHDRAWAL):
        direction = "add to" if mode == RebalanceMode.CONTRIBUTION else "withdraw from"
        missing = (f"You need to enter how much money you want to {direction} your portfolio. "
                   f"Please enter an amount greater than $0.")
        if _is_blank(mode_amount):
            raise ModeAmountError(missing)
        try:
            amount_value = parse_amount(mode_amount)
        except ValueError:
            raise ModeAmountError(missing) from None
        if amount_value <= 0:
            raise ModeAmountError(missing)

    total_value = sum(p.amount for p in positions)

    # Only a contribution gives an empty portfolio something to divide by
    if total_value <= 0 and mode != RebalanceMode.CONTRIBUTION:
        logger.warning(f"Rejected {mode.value} request for a portfolio with no value")
        raise InvalidPositionError(
            "Your portfolio has a total value of $0.00. "
            "Please enter an amount greater than $0 for at least one position."
        )

    if mode == RebalanceMode.WITHDRAWAL:
        if amount_value >= total_value:
            raise ModeAmountError(
                f"You're trying to withdraw ${amount_value:,.2f}, but your total portfolio is only worth "
                f"${total_value:,.2f}. You can't withdraw more than your total portfolio value. "
                f"Please enter a smaller amount."
            )

    logger.debug(f"Prepared {mode.value} request with {len(positions)} positions")
    return RebalanceRequest(positions=positions, mode=mode, mode_amount=amount_value)
