"""全域測試設定。"""

from __future__ import annotations

import pytest
from dotenv import load_dotenv

from skill_invoker.config import SkillInvokerConfig
from skill_invoker.invoker import SkillInvoker
from skill_invoker.skills import SkillRegistry

# 載入 .env，確保測試時也能讀取派送器相關環境變數
load_dotenv()


@pytest.fixture
def registry() -> SkillRegistry:
    """建立空的 Skill Registry。"""
    return SkillRegistry()


@pytest.fixture
def invoker(registry: SkillRegistry) -> SkillInvoker:
    """建立使用測試 registry 的派送器。"""
    return SkillInvoker(registry=registry, config=SkillInvokerConfig())
