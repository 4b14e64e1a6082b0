"""Skill 呼叫派送模組。

提供工具定義給 LLM，並把 LLM 發出的工具呼叫派送到對應的 Skill handler，
回傳 JSON 文字結果。
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field

from skill_invoker.config import SkillInvokerConfig
from skill_invoker.exceptions import InvalidCallError, SkillInvokerError, UnknownSkillError
from skill_invoker.invoker.executor import (
    CallableHandlerExecutor,
    HandlerExecutor,
    HandlerOutcome,
    OutcomeStatus,
)
from skill_invoker.skills.base import InvocationContext, Skill
from skill_invoker.skills.registry import SkillRegistry
from skill_invoker.skills.schema import synthesize_parameter_schema
from skill_invoker.types import ToolCall, ToolDefinition

logger = logging.getLogger(__name__)


@dataclass
class SkillInvoker:
    """Skill 呼叫派送器。

    負責：
    - 依 registry 當下內容產生工具定義
    - 解析呼叫、找到 Skill、交給 executor 執行
    - 原樣傳遞 handler 的例外，將回傳值序列化為 JSON

    多個 invoke 可以並行，彼此沒有順序保證。

    Attributes:
        registry: Skill 註冊表
        executor: Handler 執行者
        config: 派送器配置
    """

    registry: SkillRegistry = field(default_factory=SkillRegistry)
    executor: HandlerExecutor = field(default_factory=CallableHandlerExecutor)
    config: SkillInvokerConfig = field(default_factory=SkillInvokerConfig)

    def get_function_definitions(self) -> list[ToolDefinition] | None:
        """取得所有 Skill 的工具定義。

        Returns:
            工具定義列表（依註冊順序）；registry 為空時回傳 None
        """
        skills = self.registry.list_all()
        if not skills:
            return None

        return [
            ToolDefinition(
                name=skill.name,
                description=skill.description,
                parameters=synthesize_parameter_schema(skill).encode('utf-8'),
            )
            for skill in skills
        ]

    async def invoke(
        self,
        call: ToolCall | None,
        cancel_event: asyncio.Event | None = None,
    ) -> str | None:
        """執行一次工具呼叫。

        Args:
            call: 工具呼叫
            cancel_event: 取消訊號，被設定時中止 handler 執行（可選）

        Returns:
            JSON 文字結果；handler 沒有回傳值時回傳 None

        Raises:
            InvalidCallError: 呼叫為 None 或缺少名稱
            UnknownSkillError: Skill 不存在
            asyncio.CancelledError: 呼叫被取消
            SkillInvokerError: 執行者回報失敗但沒有附上例外
            TypeError: 回傳值無法編碼為 JSON
            ValueError: 回傳值包含 NaN 或無限大
            Exception: handler 拋出的原始例外，不做包裝
        """
        if call is None:
            msg = '工具呼叫不可為 None'
            raise InvalidCallError(msg)
        if not call.function_name:
            msg = '工具呼叫必須包含函數名稱'
            raise InvalidCallError(msg)

        skill = self.registry.lookup(call.function_name)
        if skill is None:
            raise UnknownSkillError(call.function_name)

        context = InvocationContext(arguments=call.function_arguments)
        logger.info('呼叫 Skill', extra={'skill_name': skill.name, 'call_id': call.id})

        outcome = await self._execute(skill, context, cancel_event)

        if outcome.status is OutcomeStatus.FAILED:
            if outcome.error is None:
                msg = f"Skill '{skill.name}' 執行失敗但未提供例外"
                raise SkillInvokerError(msg)
            raise outcome.error

        if outcome.status is OutcomeStatus.NO_VALUE:
            logger.warning(
                'Skill 沒有可用的回傳值，LLM 可能因此產生幻覺',
                extra={'skill_name': skill.name},
            )
            return None

        if context.result is None:
            context.result = outcome.value
        if context.result is None:
            return None

        json_result = json.dumps(
            context.result, ensure_ascii=self.config.ensure_ascii, allow_nan=False
        )
        if self.config.result_preview_length:
            logger.info(
                'Skill 回傳 JSON 結果',
                extra={
                    'skill_name': skill.name,
                    'result_preview': _preview(json_result, self.config.result_preview_length),
                },
            )
        return json_result

    async def _execute(
        self,
        skill: Skill,
        context: InvocationContext,
        cancel_event: asyncio.Event | None,
    ) -> HandlerOutcome:
        """在可取消的 task 中執行 handler。

        外層 task 被取消時，handler task 一併取消。
        cancel_event 被設定時，取消 handler 並等待其收尾後拋出 CancelledError。
        """
        if cancel_event is not None and cancel_event.is_set():
            logger.debug('呼叫開始前已取消', extra={'skill_name': skill.name})
            msg = f"Skill '{skill.name}' 的呼叫已取消"
            raise asyncio.CancelledError(msg)

        task = asyncio.ensure_future(self.executor.execute(skill, context))
        if cancel_event is None:
            return await task

        waiter = asyncio.ensure_future(cancel_event.wait())
        try:
            await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            task.cancel()
            await asyncio.wait({task})
            raise
        finally:
            waiter.cancel()
            await asyncio.wait({waiter})

        if task.done():
            return task.result()

        task.cancel()
        await asyncio.wait({task})
        logger.info('Skill 呼叫已取消', extra={'skill_name': skill.name})
        msg = f"Skill '{skill.name}' 的呼叫已取消"
        raise asyncio.CancelledError(msg)


def _preview(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + '...'
