"""西暦 → 和暦変換ユーティリティ"""

from __future__ import annotations

import numbers
from datetime import date, datetime
from typing import Any

import pandas as pd

from core.config import get_timezone, load_config
from core.gengo import InvalidDateError, OutOfRangeError
from core.wareki import Wareki
from utils.date_fmt import parse_date


def date_to_wareki(value: date, *, full: bool = False,
                   config: dict[str, Any] | None = None) -> str:
    """date / datetime を和暦文字列に変換する。

    aware な datetime は設定のタイムゾーンでの日付として数える。
    naive な datetime はその日付をそのまま使う。
    明治より前の日付は「西暦1867年」のように西暦で返す。
    full=True なら「令和7年4月1日」形式。
    """
    config = config or load_config()
    if isinstance(value, datetime):
        if value.tzinfo is not None and value.utcoffset() is not None:
            value = value.astimezone(get_timezone(config))
        value = value.date()
    try:
        label = Wareki.from_date(value).format(gannen=config.get('use_gannen', False))
    except OutOfRangeError:
        label = f'西暦{value.year}年'
    if full:
        return f'{label}{value.month}月{value.day}日'
    return label


def _make_date(year: int, month: int, day: int) -> date:
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise InvalidDateError(f'invalid date: {year}-{month}-{day}') from exc


def to_wareki(year: int, month: int = 1, day: int = 1, *,
              config: dict[str, Any] | None = None) -> str:
    """
    西暦年（と任意の月日）を和暦文字列に変換する。

    Examples:
        >>> to_wareki(2025)
        '令和7年'
        >>> to_wareki(2019, 5, 1)
        '令和1年'
        >>> to_wareki(2019, 4, 30)
        '平成31年'
        >>> to_wareki(1989, 1, 8)
        '平成1年'

    Raises:
        InvalidDateError: 暦日として成立しない年月日
    """
    return date_to_wareki(_make_date(year, month, day), config=config)


def to_wareki_full(year: int, month: int = 1, day: int = 1, *,
                   config: dict[str, Any] | None = None) -> str:
    """
    和暦を「令和7年4月1日」形式で返す。

    Examples:
        >>> to_wareki_full(2025, 4, 1)
        '令和7年4月1日'

    Raises:
        InvalidDateError: 暦日として成立しない年月日
    """
    return date_to_wareki(_make_date(year, month, day), full=True, config=config)


def fiscal_year_to_wareki(fiscal_year: int, *,
                          config: dict[str, Any] | None = None) -> str:
    """
    年度（開始月の 1 日起算）の和暦を返す。

    Examples:
        >>> fiscal_year_to_wareki(2025)
        '令和7年度'
    """
    config = config or load_config()
    start_month = config.get('fiscal_year_start_month', 4)
    label = to_wareki(fiscal_year, start_month, 1, config=config)
    return label.replace('年', '年度')


def current_fiscal_year(config: dict[str, Any] | None = None) -> int:
    """現在の年度（西暦）を返す。開始月以降は当年、それより前は前年。"""
    config = config or load_config()
    today = datetime.now(get_timezone(config)).date()
    start_month = config.get('fiscal_year_start_month', 4)
    return today.year if today.month >= start_month else today.year - 1


def current_wareki(config: dict[str, Any] | None = None) -> str:
    """現在の和暦を「令和7年」形式で返す。"""
    config = config or load_config()
    today = datetime.now(get_timezone(config)).date()
    wareki = Wareki.from_date(today)
    return wareki.format(gannen=config.get('use_gannen', False))


# ── DataFrame 列変換 ──────────────────────────────────────────────────────────

def _cell_to_date(value: Any) -> date | None:
    """セル値を date / datetime に変換する。空・変換不能なら None。"""
    if value is None:
        return None
    if isinstance(value, str):
        return parse_date(value.strip()) if value.strip() else None
    if pd.isna(value):
        return None
    if isinstance(value, date):
        return value
    if isinstance(value, numbers.Real):
        return parse_date(str(value))
    return None


def wareki_column(df: pd.DataFrame, column: str, *, full: bool = False,
                  config: dict[str, Any] | None = None) -> pd.Series:
    """DataFrame の日付列を和暦文字列の Series に変換する。

    空セル・変換不能なセルは空文字になる。元の DataFrame は変更しない。
    """
    def _convert(value: Any) -> str:
        d = _cell_to_date(value)
        if d is None:
            return ''
        return date_to_wareki(d, full=full, config=config)

    return df[column].map(_convert)
