"""派送器建立工廠模組。

提供以預設元件組裝 SkillInvoker 的工廠函數。
"""

from __future__ import annotations

import logging

from skill_invoker.config import SkillInvokerConfig
from skill_invoker.invoker.dispatcher import SkillInvoker
from skill_invoker.invoker.executor import CallableHandlerExecutor, HandlerExecutor
from skill_invoker.skills.registry import SkillRegistry

logger = logging.getLogger(__name__)


def create_skill_invoker(
    config: SkillInvokerConfig | None = None,
    registry: SkillRegistry | None = None,
    executor: HandlerExecutor | None = None,
) -> SkillInvoker:
    """建立 SkillInvoker。

    Args:
        config: 派送器配置（可選，預設從環境變數讀取）
        registry: Skill 註冊表（可選，預設建立空的註冊表）
        executor: Handler 執行者（可選，預設在行程內直接呼叫）

    Returns:
        組裝完成的 SkillInvoker
    """
    invoker = SkillInvoker(
        registry=registry if registry is not None else SkillRegistry(),
        executor=executor if executor is not None else CallableHandlerExecutor(),
        config=config if config is not None else SkillInvokerConfig.from_env(),
    )
    logger.info('SkillInvoker 已建立', extra={'skills': invoker.registry.list_skills()})
    return invoker
