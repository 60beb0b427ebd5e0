"""utils/wareki.py のユニットテスト"""

from datetime import date, datetime, timedelta, timezone
from unittest.mock import patch

import pandas as pd
import pytest

from core.gengo import JST, InvalidDateError
from utils.wareki import (
    current_fiscal_year,
    current_wareki,
    date_to_wareki,
    fiscal_year_to_wareki,
    to_wareki,
    to_wareki_full,
    wareki_column,
)

_UTC = {'utc_offset_hours': 0, 'use_gannen': False, 'fiscal_year_start_month': 4}
_GANNEN = {'utc_offset_hours': 9, 'use_gannen': True, 'fiscal_year_start_month': 4}


class TestToWareki:
    def test_reiwa_2025(self):
        assert to_wareki(2025) == '令和7年'

    def test_reiwa_start(self):
        assert to_wareki(2019, 5, 1) == '令和1年'

    def test_heisei_last_day(self):
        assert to_wareki(2019, 4, 30) == '平成31年'

    def test_heisei_start(self):
        assert to_wareki(1989, 1, 8) == '平成1年'

    def test_showa_last_day(self):
        assert to_wareki(1989, 1, 7) == '昭和64年'

    def test_showa_1(self):
        assert to_wareki(1926, 12, 25) == '昭和1年'

    def test_reiwa_2019(self):
        assert to_wareki(2019) == '平成31年'  # 1月1日時点では平成

    def test_before_meiji(self):
        assert to_wareki(1867) == '西暦1867年'

    def test_gannen(self):
        assert to_wareki(2019, 5, 1, config=_GANNEN) == '令和元年'

    def test_invalid_month(self):
        with pytest.raises(InvalidDateError):
            to_wareki(2025, 13)


class TestToWarekiFull:
    def test_full_format(self):
        assert to_wareki_full(2025, 4, 1) == '令和7年4月1日'

    def test_before_meiji(self):
        assert to_wareki_full(1867, 12, 31) == '西暦1867年12月31日'

    def test_invalid_day(self):
        with pytest.raises(InvalidDateError):
            to_wareki_full(2021, 2, 30)


class TestDateToWareki:
    def test_date(self):
        assert date_to_wareki(date(2000, 2, 29)) == '平成12年'

    def test_aware_datetime_in_japan_time(self):
        # 2019-04-30 15:00 UTC = 2019-05-01 00:00 JST
        value = datetime(2019, 4, 30, 15, 0, tzinfo=timezone.utc)
        assert date_to_wareki(value, full=True) == '令和1年5月1日'

    def test_aware_datetime_in_config_timezone(self):
        # 2019-04-30 16:00 UTC は UTC では 4 月 30 日（日本時間では 5 月 1 日）
        value = datetime(2019, 4, 30, 16, 0, tzinfo=timezone.utc)
        assert date_to_wareki(value, full=True, config=_UTC) == '平成31年4月30日'

    def test_naive_datetime_uses_wall_date(self):
        assert date_to_wareki(datetime(2019, 4, 30, 23, 59), config=_UTC) == '平成31年'


class TestFiscalYearToWareki:
    def test_2025(self):
        assert fiscal_year_to_wareki(2025) == '令和7年度'

    def test_2019(self):
        # 2019年度 = 4月1日起算 → 平成31年度（5月1日以降でも年度は4月1日基準）
        assert fiscal_year_to_wareki(2019) == '平成31年度'

    def test_start_month_from_config(self):
        config = {'fiscal_year_start_month': 5}
        assert fiscal_year_to_wareki(2019, config=config) == '令和1年度'

    def test_gannen(self):
        config = {**_GANNEN, 'fiscal_year_start_month': 5}
        assert fiscal_year_to_wareki(2019, config=config) == '令和元年度'


class TestCurrentFiscalYear:
    @patch('utils.wareki.datetime')
    def test_april_returns_current_year(self, mock_datetime):
        mock_datetime.now.return_value = datetime(2025, 4, 1, tzinfo=JST)
        assert current_fiscal_year() == 2025

    @patch('utils.wareki.datetime')
    def test_march_returns_previous_year(self, mock_datetime):
        mock_datetime.now.return_value = datetime(2025, 3, 31, tzinfo=JST)
        assert current_fiscal_year() == 2024


class TestCurrentWareki:
    def test_reiwa(self):
        assert current_wareki().startswith('令和')

    @patch('utils.wareki.datetime')
    def test_counts_date_in_config_timezone(self, mock_datetime):
        mock_datetime.now.return_value = datetime(2019, 4, 30, 20, 0, tzinfo=timezone.utc)
        assert current_wareki(_UTC) == '平成31年'
        mock_datetime.now.assert_called_once_with(timezone(timedelta(0)))

    @patch('utils.wareki.datetime')
    def test_default_timezone_is_japan(self, mock_datetime):
        mock_datetime.now.return_value = datetime(2019, 5, 1, 5, 0, tzinfo=JST)
        assert current_wareki({'utc_offset_hours': 9}) == '令和1年'
        mock_datetime.now.assert_called_once_with(timezone(timedelta(hours=9)))


class TestWarekiColumn:
    def test_mixed_cells(self):
        df = pd.DataFrame({'生年月日': [
            '2018-06-15',
            '1989/1/7',
            date(2019, 5, 1),
            pd.Timestamp('2000-01-01'),
            '',
            None,
            'abc',
        ]})
        result = wareki_column(df, '生年月日')
        assert list(result) == ['平成30年', '昭和64年', '令和1年', '平成12年', '', '', '']

    def test_full(self):
        df = pd.DataFrame({'入学日': ['2025-04-01']})
        assert wareki_column(df, '入学日', full=True).iloc[0] == '令和7年4月1日'

    def test_datetime_column(self):
        df = pd.DataFrame({'d': pd.to_datetime(['1926-12-25', None])})
        assert list(wareki_column(df, 'd')) == ['昭和1年', '']

    def test_excel_serial(self):
        df = pd.DataFrame({'d': [43266.0]})
        assert wareki_column(df, 'd').iloc[0] == '平成30年'

    def test_does_not_modify_source(self):
        df = pd.DataFrame({'d': ['2025-04-01']})
        wareki_column(df, 'd')
        assert df['d'].iloc[0] == '2025-04-01'
