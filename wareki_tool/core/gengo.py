"""元号テーブルと元号の判定・検索

明治以降の 5 元号を定数として保持し、日付から元号を求める処理と
元号名（漢字・略称・ローマ字・ローマ字略称）の判定・検索を提供する。

テーブルは新しい順に並んでおり、日付検索は「開始日時 <= 対象日時」を
満たす最初の要素を返す。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Final

logger = logging.getLogger(__name__)

# ── 定数 ─────────────────────────────────────────────────────────────────────

JST: Final[timezone] = timezone(timedelta(hours=9), 'JST')


class OutOfRangeError(ValueError):
    """対象日付が明治より前で、該当する元号がない。"""

    def __init__(self, value: date) -> None:
        super().__init__(f'out of range: {value.isoformat()}')
        self.value = value


class InvalidDateError(ValueError):
    """年・月・日の組み合わせが暦日として成立しない。"""


@dataclass(frozen=True, slots=True)
class Gengo:
    """元号。

    同値判定は ``name`` と ``since`` のみで行う。
    """
    name: str
    abbr_name: str = field(compare=False)
    roman_name: str = field(compare=False)
    abbr_roman_name: str = field(compare=False)
    since: datetime

    def __str__(self) -> str:
        return self.name


# ── 元号テーブル（新しい順） ──────────────────────────────────────────────────

REIWA: Final[Gengo] = Gengo('令和', '令', 'Reiwa', 'R', datetime(2019, 5, 1, tzinfo=JST))
HEISEI: Final[Gengo] = Gengo('平成', '平', 'Heisei', 'H', datetime(1989, 1, 8, tzinfo=JST))
SHOWA: Final[Gengo] = Gengo('昭和', '昭', 'Showa', 'S', datetime(1926, 12, 25, tzinfo=JST))
TAISHO: Final[Gengo] = Gengo('大正', '大', 'Taisho', 'T', datetime(1912, 7, 30, tzinfo=JST))
MEIJI: Final[Gengo] = Gengo('明治', '明', 'Meiji', 'M', datetime(1868, 1, 25, tzinfo=JST))

GENGO_LIST: Final[tuple[Gengo, ...]] = (REIWA, HEISEI, SHOWA, TAISHO, MEIJI)


def list_gengo() -> tuple[Gengo, ...]:
    """元号一覧を新しい順で返す。"""
    return GENGO_LIST


# ── 日付 → 元号 ──────────────────────────────────────────────────────────────

def to_jst(value: date) -> datetime:
    """date / naive datetime / aware datetime を日本時間の aware datetime にそろえる。

    date は 0 時、naive な値は日本時間の壁時計時刻として扱う。
    """
    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            return value.replace(tzinfo=JST)
        return value.astimezone(JST)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=JST)
    raise TypeError(f'date or datetime expected, got {type(value).__name__}')


def from_date(value: date) -> Gengo:
    """日付から元号を取得する。

    Args:
        value: ``date`` または ``datetime``（タイムゾーンの有無は問わない）

    Raises:
        OutOfRangeError: 明治（1868-01-25）より前の日付
    """
    instant = to_jst(value)
    for gengo in GENGO_LIST:
        if gengo.since <= instant:
            return gengo
    logger.debug('元号の範囲外: %s', value)
    raise OutOfRangeError(value)


def from_iso_date(year: int, month: int, day: int) -> Gengo:
    """年・月・日から元号を取得する。

    Raises:
        InvalidDateError: 暦日として成立しない年月日
        OutOfRangeError: 明治より前の日付
    """
    try:
        target = date(year, month, day)
    except ValueError as exc:
        raise InvalidDateError(f'invalid date: {year}-{month}-{day}') from exc
    return from_date(target)


def now(tz: tzinfo | None = None) -> Gengo:
    """現在の元号を返す。tz 省略時は日本時間。"""
    return from_date(datetime.now(tz or JST))


# ── 文字列 → 元号 ────────────────────────────────────────────────────────────

def _normalize(text: str) -> str:
    return text.lower()


def _matches(text: str | None, attr: str) -> bool:
    if text is None:
        return False
    key = _normalize(text)
    return any(_normalize(getattr(g, attr)) == key for g in GENGO_LIST)


def of(name_or_code: str | None) -> Gengo | None:
    """元号名・略称・ローマ字・ローマ字略称から元号を取得する。

    大文字小文字は区別しない。前後の空白は除去しない。
    該当がなければ None を返す。
    """
    if name_or_code is None:
        return None
    key = _normalize(name_or_code)
    for gengo in GENGO_LIST:
        if key in (
            _normalize(gengo.name),
            _normalize(gengo.abbr_name),
            _normalize(gengo.roman_name),
            _normalize(gengo.abbr_roman_name),
        ):
            return gengo
    logger.debug('元号が見つかりません: %r', name_or_code)
    return None


def is_valid(name_or_code: str | None) -> bool:
    """いずれかの表記で正しい元号か判定する。"""
    return (
        is_valid_name(name_or_code)
        or is_valid_abbr_name(name_or_code)
        or is_valid_roman_name(name_or_code)
        or is_valid_abbr_roman_name(name_or_code)
    )


def is_valid_name(name: str | None) -> bool:
    """正しい元号名（令和 など）か判定する。"""
    return _matches(name, 'name')


def is_valid_abbr_name(abbr_name: str | None) -> bool:
    """正しい元号略称（令 など）か判定する。"""
    return _matches(abbr_name, 'abbr_name')


def is_valid_roman_name(roman_name: str | None) -> bool:
    """正しいローマ字元号名（Reiwa など）か判定する。"""
    return _matches(roman_name, 'roman_name')


def is_valid_abbr_roman_name(abbr_roman_name: str | None) -> bool:
    """正しいローマ字略称（R など）か判定する。"""
    return _matches(abbr_roman_name, 'abbr_roman_name')
