"""漢数字の変換

0 以上の整数と漢数字（〇一二…十百千万億兆京）を相互に変換する。
十・百・千の位の「一」は付けない（千二百五）。万以上の単位には付ける（一万）。
"""

from __future__ import annotations

from typing import Final

_NUMERALS: Final[str] = '〇一二三四五六七八九'
_DECIMAL_UNITS: Final[tuple[str, ...]] = ('', '十', '百', '千')
_MYRIAD_UNITS: Final[tuple[str, ...]] = ('', '万', '億', '兆', '京')

# 京の次の単位がないため上限を設ける
MAX_NUMBER: Final[int] = 10 ** (4 * len(_MYRIAD_UNITS)) - 1


class JapaneseNumeralError(ValueError):
    """漢数字に変換できない、または漢数字として解釈できない。"""


def _format_section(section: int) -> str:
    """1〜9999 を漢数字にする。"""
    text = ''
    for pos in (3, 2, 1, 0):
        digit = section // 10 ** pos % 10
        if digit == 0:
            continue
        if not (digit == 1 and pos > 0):
            text += _NUMERALS[digit]
        text += _DECIMAL_UNITS[pos]
    return text


def to_kanji(number: int) -> str:
    """整数を漢数字に変換する。

    Examples:
        >>> to_kanji(1205)
        '千二百五'
        >>> to_kanji(100010)
        '十万十'

    Raises:
        JapaneseNumeralError: 負数または京の位を超える数
    """
    if number < 0:
        raise JapaneseNumeralError(f'number({number}) must be positive.')
    if number > MAX_NUMBER:
        raise JapaneseNumeralError(f'number({number}) is too large.')
    if number == 0:
        return _NUMERALS[0]
    parts: list[str] = []
    myriad = 0
    while number:
        number, section = divmod(number, 10000)
        if section:
            parts.append(_format_section(section) + _MYRIAD_UNITS[myriad])
        myriad += 1
    return ''.join(reversed(parts))


def from_kanji(text: str) -> int:
    """漢数字を整数に変換する。

    単位付きの表記（千二百五）に加え、位取りの表記（二〇二五）も受け付ける。

    Raises:
        JapaneseNumeralError: 空文字または漢数字以外の文字を含む
    """
    if not text:
        raise JapaneseNumeralError('string is empty.')
    total = 0
    section = 0
    digits: int | None = None
    for c in text:
        if c in _NUMERALS:
            n = _NUMERALS.index(c)
            digits = n if digits is None else digits * 10 + n
        elif c in _DECIMAL_UNITS[1:]:
            section += (1 if digits is None else digits) * 10 ** _DECIMAL_UNITS.index(c)
            digits = None
        elif c in _MYRIAD_UNITS[1:]:
            section += digits or 0
            total += (section or 1) * 10000 ** _MYRIAD_UNITS.index(c)
            section = 0
            digits = None
        else:
            raise JapaneseNumeralError(f'invalid character: {c}')
    return total + section + (digits or 0)
