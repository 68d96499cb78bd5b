"""Tokenizer turning one free-text ingredient line into amount, unit and name."""

from __future__ import annotations

import math
import re
from typing import Iterable

from larder.extraction.models import IngredientRecord
from larder.extraction.normalization import normalize_text

_NON_NUMERIC_RE = re.compile(r"[^\d./]")
_DECIMAL_RE = re.compile(r"^(?:\d+(?:\.\d*)?|\.\d+)$")
_FRACTION_RE = re.compile(r"^(\d+(?:\.\d+)?)/(\d+(?:\.\d+)?)$")


def parse_amount(token: str) -> float | None:
    """Parse a leading quantity token such as ``2``, ``0.5``, ``2.5,`` or ``1/2``.

    Characters other than digits, ``.`` and ``/`` are dropped first, so
    punctuation glued to the number does not prevent a match.
    """

    numeric = _NON_NUMERIC_RE.sub("", token)
    if not numeric:
        return None

    if _DECIMAL_RE.match(numeric):
        value = float(numeric)
    else:
        fraction = _FRACTION_RE.match(numeric)
        if fraction is None:
            return None
        denominator = float(fraction.group(2))
        if denominator == 0:
            return None
        value = float(fraction.group(1)) / denominator

    if not math.isfinite(value) or value < 0:
        return None
    return value


def parse_ingredient_line(raw: str) -> IngredientRecord:
    """Split ``"2 lbs ground beef"`` into amount ``2``, unit ``lbs`` and name ``ground beef``.

    Lines without a leading quantity keep the whole text as the name. The
    tokenizer never fails; an empty name is a valid result.
    """

    text = normalize_text(raw)
    if not text:
        return IngredientRecord(name="")

    parts = text.split(" ")
    amount = parse_amount(parts[0])
    if amount is None:
        return IngredientRecord(name=text)

    if len(parts) >= 3:
        return IngredientRecord(name=" ".join(parts[2:]), amount=amount, unit=parts[1])
    return IngredientRecord(name=" ".join(parts[1:]), amount=amount)


def parse_ingredient_lines(lines: Iterable[str]) -> list[IngredientRecord]:
    return [parse_ingredient_line(line) for line in lines]


def format_amount(amount: float) -> str:
    if amount.is_integer():
        return str(int(amount))
    return repr(amount)


def format_ingredient(record: IngredientRecord) -> str:
    """Render a record back into ``amount unit name`` line form."""

    parts: list[str] = []
    if record.amount is not None:
        parts.append(format_amount(record.amount))
    if record.unit:
        parts.append(record.unit)
    if record.name:
        parts.append(record.name)
    return " ".join(parts)
