"""和暦パターンによる日時のフォーマット・解析

パターン記号:

    記号   意味                  例
    ----   ----                  --
    GGGG   元号名                令和
    GGG    ローマ字元号名        Reiwa
    GG     元号略称              令
    G      ローマ字略称          R
    yyyy   元号年（漢数字）      元, 七, 三十一
    yyy    元号年（元年表記）    元, 7, 31
    yy     元号年（2 桁）        01, 07
    y      元号年                1, 7
    uuuu   西暦年（4 桁）        2025
    uu     西暦年（下 2 桁）     25
    u      西暦年                2025
    MM/M   月                    04 / 4
    dd/d   日                    01 / 1
    HH/H   時 (0-23)             09 / 9
    mm/m   分                    05 / 5
    ss/s   秒                    03 / 3
    SSS    ミリ秒                042

記号以外の文字はそのまま出力される。英字をそのまま出したい場合は
シングルクォートで囲む（'T'）。'' は ' 1 文字を表す。
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable

from core.gengo import GENGO_LIST, Gengo, InvalidDateError, of, to_jst
from core.japanese_numeral import from_kanji, to_kanji
from core.wareki import Wareki


class DateTimeParseError(ValueError):
    """文字列がパターンに一致しない。"""


@dataclass(slots=True)
class _DateFields:
    """フォーマット・解析中の日時項目。"""
    gengo: Gengo | None = None
    nen: int = 0
    year: int = 0
    month: int = 1
    day: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0

    @classmethod
    def from_date(cls, value: date, with_era: bool) -> _DateFields:
        fields = cls()
        if isinstance(value, datetime):
            value = to_jst(value)
            fields.hour = value.hour
            fields.minute = value.minute
            fields.second = value.second
            fields.millisecond = value.microsecond // 1000
        fields.year = value.year
        fields.month = value.month
        fields.day = value.day
        if with_era:
            wareki = Wareki.from_date(value)
            fields.gengo = wareki.gengo
            fields.nen = wareki.nen
        return fields

    def to_datetime(self) -> datetime:
        """日本時間の naive datetime に変換する。元号があれば西暦年は元号から求める。"""
        year = self.year
        if self.gengo is not None:
            year = Wareki(self.gengo, self.nen).year
        elif self.nen:
            raise DateTimeParseError('元号年に対応する元号がありません')
        try:
            return datetime(year, self.month, self.day, self.hour, self.minute,
                            self.second, self.millisecond * 1000)
        except ValueError as exc:
            raise InvalidDateError(f'invalid date: {year}-{self.month}-{self.day}') from exc


@dataclass(frozen=True, slots=True)
class _Field:
    """パターン記号 1 つ分の定義。"""
    symbol: str
    regex: str
    attr: str
    width: int = 1
    to_text: Callable[[Any], str] | None = None
    from_text: Callable[[str], Any] | None = None

    @property
    def needs_era(self) -> bool:
        return self.attr in ('gengo', 'nen')

    def render(self, fields: _DateFields) -> str:
        value = getattr(fields, self.attr)
        if self.to_text is not None:
            return self.to_text(value)
        return str(value).zfill(self.width)

    def apply(self, fields: _DateFields, text: str) -> None:
        value = self.from_text(text) if self.from_text is not None else int(text)
        setattr(fields, self.attr, value)


def _alternation(names: list[str]) -> str:
    return '|'.join(re.escape(n) for n in sorted(names, key=len, reverse=True))


def _kanji_nen(nen: int) -> str:
    return '元' if nen == 1 else to_kanji(nen)


def _parse_kanji_nen(text: str) -> int:
    return 1 if text == '元' else from_kanji(text)


_FIELDS: tuple[_Field, ...] = (
    _Field('GGGG', _alternation([g.name for g in GENGO_LIST]), 'gengo',
           to_text=lambda g: g.name, from_text=of),
    _Field('GGG', _alternation([g.roman_name for g in GENGO_LIST]), 'gengo',
           to_text=lambda g: g.roman_name, from_text=of),
    _Field('GG', _alternation([g.abbr_name for g in GENGO_LIST]), 'gengo',
           to_text=lambda g: g.abbr_name, from_text=of),
    _Field('G', _alternation([g.abbr_roman_name for g in GENGO_LIST]), 'gengo',
           to_text=lambda g: g.abbr_roman_name, from_text=of),
    _Field('yyyy', '元|[一二三四五六七八九十]{1,3}', 'nen',
           to_text=_kanji_nen, from_text=_parse_kanji_nen),
    _Field('yyy', '元|[1-9][0-9]?', 'nen',
           to_text=lambda n: '元' if n == 1 else str(n),
           from_text=lambda v: 1 if v == '元' else int(v)),
    _Field('yy', '[0-9]{2}', 'nen', 2, to_text=lambda n: f'{n % 100:02d}'),
    _Field('y', '[0-9]{1,2}', 'nen'),
    _Field('uuuu', '[0-9]{4}', 'year', 4),
    _Field('uu', '[0-9]{2}', 'year', 2,
           to_text=lambda y: f'{y % 100:02d}', from_text=lambda v: 2000 + int(v)),
    _Field('u', '[0-9]{1,4}', 'year'),
    _Field('MM', '0[1-9]|1[0-2]', 'month', 2),
    _Field('M', '1[0-2]|[1-9]', 'month'),
    _Field('dd', '0[1-9]|[12][0-9]|3[01]', 'day', 2),
    _Field('d', '3[01]|[12][0-9]|[1-9]', 'day'),
    _Field('HH', '[01][0-9]|2[0-3]', 'hour', 2),
    _Field('H', '2[0-3]|1[0-9]|[0-9]', 'hour'),
    _Field('mm', '[0-5][0-9]', 'minute', 2),
    _Field('m', '[1-5][0-9]|[0-9]', 'minute'),
    _Field('ss', '[0-5][0-9]', 'second', 2),
    _Field('s', '[1-5][0-9]|[0-9]', 'second'),
    _Field('SSS', '[0-9]{3}', 'millisecond', 3),
)

# 長い記号から順に照合する
_SYMBOL_RE = re.compile(
    '|'.join(re.escape(f.symbol) for f in sorted(_FIELDS, key=lambda f: len(f.symbol), reverse=True))
)
_FIELD_BY_SYMBOL: dict[str, _Field] = {f.symbol: f for f in _FIELDS}


def _compile(pattern: str) -> list[_Field | str]:
    """パターン文字列を記号とリテラル文字列の列に分解する。"""
    segments: list[_Field | str] = []
    literal = ''
    pos = 0
    while pos < len(pattern):
        if pattern[pos] == "'":
            end = pattern.find("'", pos + 1)
            if end < 0:
                raise ValueError(f'unterminated quote in pattern: {pattern!r}')
            literal += pattern[pos + 1:end] if end > pos + 1 else "'"
            pos = end + 1
            continue
        m = _SYMBOL_RE.match(pattern, pos)
        if m is None:
            literal += pattern[pos]
            pos += 1
            continue
        if literal:
            segments.append(literal)
            literal = ''
        segments.append(_FIELD_BY_SYMBOL[m.group()])
        pos = m.end()
    if literal:
        segments.append(literal)
    return segments


class DateTimeFormatter:
    """和暦パターンで日時をフォーマット・解析する。

    Examples:
        >>> DateTimeFormatter('GGGGyyyy年M月d日').format(date(2019, 5, 1))
        '令和元年5月1日'
        >>> DateTimeFormatter('Gyy.MM.dd').parse('H31.04.30')
        datetime.datetime(2019, 4, 30, 0, 0)
    """

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self._segments = _compile(pattern)
        self._needs_era = any(isinstance(s, _Field) and s.needs_era for s in self._segments)
        self._regex = re.compile(''.join(
            re.escape(s) if isinstance(s, str) else f'({s.regex})' for s in self._segments
        ))

    def __str__(self) -> str:
        return self.pattern

    def __repr__(self) -> str:
        return f'DateTimeFormatter({self.pattern!r})'

    def format(self, value: date) -> str:
        """日時をパターンに従って文字列にする。

        Raises:
            OutOfRangeError: 元号を含むパターンで明治より前の日付
        """
        fields = _DateFields.from_date(value, self._needs_era)
        return ''.join(s if isinstance(s, str) else s.render(fields) for s in self._segments)

    def parse(self, text: str) -> datetime:
        """文字列をパターンに従って解析し、日本時間の naive datetime を返す。

        Raises:
            DateTimeParseError: 文字列がパターンに一致しない
            InvalidWarekiError: 元号と元号年の組み合わせが不正
            InvalidDateError: 暦日として成立しない
        """
        if not text:
            raise DateTimeParseError('parse exception empty')
        m = self._regex.fullmatch(text)
        if m is None:
            raise DateTimeParseError(f'parse exception pattern:{self.pattern} text:{text}')
        fields = _DateFields()
        groups = iter(m.groups())
        for segment in self._segments:
            if isinstance(segment, _Field):
                segment.apply(fields, next(groups))
        return fields.to_datetime()
