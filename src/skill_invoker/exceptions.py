"""Skill Invoker 例外模組。

定義派送流程中的例外類別。Handler 自身拋出的例外不會被包裝，
會原封不動地傳回給 invoke 的呼叫端。
"""

from __future__ import annotations


class SkillInvokerError(Exception):
    """Skill Invoker 基礎例外。"""


class InvalidCallError(SkillInvokerError, ValueError):
    """呼叫格式不正確（缺少呼叫物件或函數名稱）。"""


class UnknownSkillError(SkillInvokerError, LookupError):
    """請求的 Skill 尚未註冊。"""

    def __init__(self, skill_name: str) -> None:
        self.skill_name = skill_name
        super().__init__(f"未註冊名為 '{skill_name}' 的 Skill")


class DuplicateSkillError(SkillInvokerError, ValueError):
    """Skill 名稱已存在（不分大小寫）。"""

    def __init__(self, skill_name: str) -> None:
        self.skill_name = skill_name
        super().__init__(f"Skill '{skill_name}' 已存在，不允許重複註冊")


class SkillBindingError(SkillInvokerError, TypeError):
    """呼叫參數無法綁定到 handler 的輸入參數。"""
