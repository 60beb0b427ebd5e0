"""日付文字列の解析・フォーマットユーティリティ"""

import re
from datetime import date, timedelta

_DATE_RE = re.compile(r'(\d{4})[-/](\d{1,2})[-/](\d{1,2})(?:[ T].*)?$')

# Excel シリアル値の起点（1900 年うるう年バグ込み）
_EXCEL_EPOCH = date(1899, 12, 30)


def parse_date(s: str) -> date | None:
    """日付文字列を date に変換する。変換不能なら None を返す。

    対応形式:
        - "2018-06-15" / "2018/06/15" / "2018-06-15 00:00:00"
        - Excel シリアル値 ("43266.0")
    """
    m = _DATE_RE.match(s)
    if m:
        try:
            return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
        except ValueError:
            return None
    try:
        serial = float(s)
    except ValueError:
        return None
    if 1 < serial < 100000:
        return _EXCEL_EPOCH + timedelta(days=int(serial))
    return None


def format_date(s: str) -> str:
    """日付文字列を YY/MM/DD 形式に変換する。変換不能ならそのまま返す。"""
    d = parse_date(s)
    if d is None:
        return s
    return d.strftime('%y/%m/%d')
