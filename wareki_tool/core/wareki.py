"""和暦（元号 + 元号年）"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, tzinfo

from core.gengo import GENGO_LIST, JST, Gengo, from_date, of, to_jst

# 最新の元号は終了年が未定のため、上限年を固定する
_OPEN_ERA_LAST_NEN = 99


class InvalidWarekiError(ValueError):
    """元号と元号年の組み合わせが不正。"""


def _last_nen(gengo: Gengo) -> int:
    """元号の最終年（次の元号が始まった年）を返す。"""
    try:
        idx = GENGO_LIST.index(gengo)
    except ValueError:
        raise InvalidWarekiError(f'gengo out of range: {gengo}') from None
    if idx == 0:
        return _OPEN_ERA_LAST_NEN
    following = GENGO_LIST[idx - 1]
    return following.since.year - gengo.since.year + 1


def is_valid_nen(gengo: Gengo, nen: int) -> bool:
    """元号と元号年の組み合わせが正しいか判定する。

    Raises:
        InvalidWarekiError: テーブルにない元号
    """
    if nen < 1:
        return False
    return nen <= _last_nen(gengo)


def to_year(gengo: Gengo, nen: int) -> int:
    """元号年を西暦年に変換する。"""
    return gengo.since.year + nen - 1


@dataclass(frozen=True, slots=True)
class Wareki:
    """和暦。

    Examples:
        >>> str(Wareki.of('令和', 7))
        '令和7年'
        >>> Wareki.of('H', 1).format(gannen=True)
        '平成元年'
    """
    gengo: Gengo
    nen: int

    def __post_init__(self) -> None:
        if not is_valid_nen(self.gengo, self.nen):
            raise InvalidWarekiError(f'invalid value gengo:{self.gengo} nen:{self.nen}')

    def __str__(self) -> str:
        return self.format()

    @property
    def year(self) -> int:
        """西暦年。"""
        return to_year(self.gengo, self.nen)

    def format(self, gannen: bool = False) -> str:
        """「令和7年」形式で返す。gannen=True なら 1 年目を「元年」と表記する。"""
        nen = '元' if gannen and self.nen == 1 else str(self.nen)
        return f'{self.gengo.name}{nen}年'

    @classmethod
    def from_date(cls, value: date) -> Wareki:
        """日付から和暦を取得する。年は日本時間で数える。

        Raises:
            OutOfRangeError: 明治より前の日付
        """
        gengo = from_date(value)
        year = to_jst(value).year
        return cls(gengo, year - gengo.since.year + 1)

    @classmethod
    def now(cls, tz: tzinfo | None = None) -> Wareki:
        """現在の和暦を返す。"""
        return cls.from_date(datetime.now(tz or JST))

    @classmethod
    def of(cls, name_or_code: str, nen: int) -> Wareki:
        """元号の表記（令和 / 令 / Reiwa / R）と元号年から和暦を作る。"""
        gengo = of(name_or_code)
        if gengo is None:
            raise InvalidWarekiError(f'unknown gengo: {name_or_code!r}')
        return cls(gengo, nen)
