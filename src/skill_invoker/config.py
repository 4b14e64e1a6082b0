"""Skill Invoker 配置模組。

提供派送器的配置資料結構，支援從環境變數（與 .env）讀取。
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# 預設值
DEFAULT_RESULT_PREVIEW_LENGTH = 200

ENV_RESULT_PREVIEW_LENGTH = 'SKILL_INVOKER_RESULT_PREVIEW_LENGTH'
ENV_ENSURE_ASCII = 'SKILL_INVOKER_ENSURE_ASCII'

_TRUTHY = {'1', 'true', 'yes', 'on'}


@dataclass
class SkillInvokerConfig:
    """派送器配置。

    Attributes:
        result_preview_length: 日誌中結果預覽的最大字元數（0 表示不記錄預覽）
        ensure_ascii: 序列化結果時是否跳脫非 ASCII 字元
    """

    result_preview_length: int = DEFAULT_RESULT_PREVIEW_LENGTH
    ensure_ascii: bool = False

    def __post_init__(self) -> None:
        if self.result_preview_length < 0:
            msg = 'result_preview_length 不可為負數'
            raise ValueError(msg)

    @classmethod
    def from_env(cls, dotenv_path: str | Path | None = None) -> SkillInvokerConfig:
        """從環境變數建立配置。

        會先載入 .env（不覆寫既有環境變數），未設定的欄位使用預設值。

        Args:
            dotenv_path: .env 檔案路徑（可選，預設自動搜尋）

        Returns:
            配置物件

        Raises:
            ValueError: 環境變數格式錯誤
        """
        load_dotenv(dotenv_path)

        preview = os.environ.get(ENV_RESULT_PREVIEW_LENGTH)
        ensure_ascii = os.environ.get(ENV_ENSURE_ASCII)
        return cls(
            result_preview_length=(
                int(preview) if preview is not None else DEFAULT_RESULT_PREVIEW_LENGTH
            ),
            ensure_ascii=(
                ensure_ascii.strip().lower() in _TRUTHY if ensure_ascii is not None else False
            ),
        )
