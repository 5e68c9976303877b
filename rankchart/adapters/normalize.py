from __future__ import annotations

import datetime as dt
import math
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any, Iterable

import numpy as np

from rankchart.errors import MalformedObservationError
from rankchart.models import RankObservation


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def normalize_observations(
    records: Iterable[Any] | None = None,
    *,
    days: Any = None,
    ranks: Any = None,
    data: Any = None,
    day_column: str = "day",
    rank_column: str = "rank",
) -> tuple[RankObservation, ...]:
    """Validate chart input and return it as ``RankObservation`` values, in input order.

    Accepts exactly one of: ``records`` (observations, ``(day, rank)`` pairs or
    mappings), parallel ``days``/``ranks`` sequences, or a pandas ``data`` frame.
    """
    given = sum(v is not None for v in (records, data)) + (days is not None or ranks is not None)
    if given > 1:
        raise MalformedObservationError("pass only one of records, days/ranks or data")

    if data is not None:
        days, ranks = _frame_columns(data, day_column=day_column, rank_column=rank_column)
    if days is not None or ranks is not None:
        if days is None or ranks is None:
            raise MalformedObservationError("days and ranks must be given together")
        day_values = _coerce_1d(days, label="days")
        rank_values = _coerce_1d(ranks, label="ranks")
        if len(day_values) != len(rank_values):
            raise MalformedObservationError(
                f"days and ranks length mismatch: {len(day_values)} != {len(rank_values)}"
            )
        return tuple(
            _build(day, rank, index=i) for i, (day, rank) in enumerate(zip(day_values, rank_values))
        )

    if records is None:
        return ()
    if pd is not None and isinstance(records, pd.DataFrame):
        return normalize_observations(data=records, day_column=day_column, rank_column=rank_column)
    if isinstance(records, (str, bytes, bytearray)):
        raise MalformedObservationError(f"unsupported records input type: {type(records)!r}")
    out: list[RankObservation] = []
    for i, record in enumerate(records):
        if isinstance(record, RankObservation):
            out.append(record)
        elif isinstance(record, Mapping):
            if day_column not in record or rank_column not in record:
                raise MalformedObservationError(
                    f"mapping must contain `{day_column}` and `{rank_column}`", index=i
                )
            out.append(_build(record[day_column], record[rank_column], index=i))
        elif isinstance(record, Sequence) and not isinstance(record, (str, bytes, bytearray)):
            if len(record) != 2:
                raise MalformedObservationError("pair must be (day, rank)", index=i)
            out.append(_build(record[0], record[1], index=i))
        else:
            raise MalformedObservationError(f"unsupported record type: {type(record)!r}", index=i)
    return tuple(out)


def coerce_day(value: Any) -> dt.date:
    if isinstance(value, dt.datetime):
        if pd is not None and value is pd.NaT:
            raise ValueError("missing date")
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, np.datetime64):
        if np.isnat(value):
            raise ValueError("missing date")
        return value.astype("datetime64[D]").item()
    if isinstance(value, str):
        text = value.strip()
        try:
            return dt.date.fromisoformat(text)
        except ValueError:
            return dt.datetime.fromisoformat(text).date()
    raise ValueError(f"unsupported date value: {value!r}")


def coerce_rank(value: Any) -> int | float:
    if isinstance(value, (bool, np.bool_)):
        raise ValueError(f"rank must be numeric, got {value!r}")
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, Decimal):
        value = float(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
        return value
    raise ValueError(f"rank must be numeric, got {value!r}")


def _build(day: Any, rank: Any, *, index: int) -> RankObservation:
    try:
        coerced_day = coerce_day(day)
    except ValueError as exc:
        raise MalformedObservationError(f"invalid day {day!r}: {exc}", index=index) from exc
    try:
        coerced_rank = coerce_rank(rank)
    except ValueError as exc:
        raise MalformedObservationError(str(exc), index=index) from exc
    try:
        return RankObservation(day=coerced_day, rank=coerced_rank)
    except MalformedObservationError as exc:
        raise MalformedObservationError(str(exc), index=index) from exc


def _frame_columns(data: Any, *, day_column: str, rank_column: str) -> tuple[Any, Any]:
    if pd is None:
        raise MalformedObservationError("pandas is required when using `data=`")
    if not isinstance(data, pd.DataFrame):
        raise MalformedObservationError("`data` must be a pandas DataFrame")
    for column in (day_column, rank_column):
        if column not in data.columns:
            raise MalformedObservationError(f"column not found: {column}")
    return data[day_column], data[rank_column]


def _coerce_1d(value: Any, *, label: str) -> list[Any]:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise MalformedObservationError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy().tolist()

    if pd is not None and isinstance(value, pd.Series):
        return list(value.to_list())

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise MalformedObservationError(f"{label} must be 1-D")
        if value.dtype.kind == "M":
            return list(value)
        return value.tolist()

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return list(value)

    raise MalformedObservationError(f"unsupported {label} input type: {type(value)!r}")
