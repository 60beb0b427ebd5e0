"""表示オプション（config.json）管理"""

from __future__ import annotations

import json
import logging
import os
from datetime import timedelta, timezone
from typing import Any

logger = logging.getLogger(__name__)


def _get_app_dir() -> str:
    """プロジェクトルート（wareki_tool/ の親）を返す。"""
    return os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def _get_config_path() -> str:
    """既定の config.json の絶対パスを返す。"""
    return os.path.join(_get_app_dir(), 'config.json')


def _default_config() -> dict[str, Any]:
    """デフォルト設定を返す。"""
    return {
        'utc_offset_hours': 9,          # 日付を数えるタイムゾーン（日本時間）
        'use_gannen': False,            # 1 年目を「元年」と表記するか
        'fiscal_year_start_month': 4,   # 年度の開始月
    }


def _deep_merge(base: dict, override: dict) -> dict:
    """ネストした辞書を再帰的にマージする。override が優先。"""
    result = dict(base)
    for k, v in override.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def load_config(path: str | None = None) -> dict[str, Any]:
    """config.json を読み込む。

    path 省略時はプロジェクトルートの config.json を読む。
    ファイルが存在しない場合、内容が不正な場合はデフォルト値を返す。
    """
    defaults = _default_config()
    if path is None:
        path = _get_config_path()
    if not os.path.exists(path):
        return defaults
    try:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning('設定ファイルを読み込めません: %s (%s)', path, exc)
        return defaults
    if not isinstance(data, dict):
        logger.warning('設定ファイルの形式が不正です: %s', path)
        return defaults
    return _deep_merge(defaults, data)


def get_timezone(config: dict[str, Any] | None = None) -> timezone:
    """日付を数えるタイムゾーンを返す。"""
    config = config or load_config()
    hours = config.get('utc_offset_hours', 9)
    return timezone(timedelta(hours=hours))
