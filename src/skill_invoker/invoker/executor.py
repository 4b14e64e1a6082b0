"""Handler 執行模組。

定義執行 Skill handler 的介面，以及預設的行程內實作。
執行結果以 HandlerOutcome 標記為有回傳值、無回傳值或失敗。
"""

from __future__ import annotations

import enum
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from skill_invoker.exceptions import SkillBindingError
from skill_invoker.skills.base import InvocationContext, Skill, resolve_annotations

logger = logging.getLogger(__name__)


class OutcomeStatus(enum.Enum):
    """Handler 執行結果類型。"""

    VALUE = 'value'
    NO_VALUE = 'no_value'
    FAILED = 'failed'


@dataclass(frozen=True)
class HandlerOutcome:
    """Handler 執行結果。

    Attributes:
        status: 結果類型
        value: handler 回傳值（僅 VALUE 時有意義）
        error: handler 拋出的原始例外（僅 FAILED 時有值）
    """

    status: OutcomeStatus
    value: Any = None
    error: Exception | None = None

    @classmethod
    def returned(cls, value: Any) -> HandlerOutcome:
        """建立帶有回傳值的結果。"""
        return cls(status=OutcomeStatus.VALUE, value=value)

    @classmethod
    def empty(cls) -> HandlerOutcome:
        """建立沒有回傳值的結果。"""
        return cls(status=OutcomeStatus.NO_VALUE)

    @classmethod
    def failed(cls, error: Exception) -> HandlerOutcome:
        """建立失敗結果，保留 handler 拋出的原始例外。"""
        return cls(status=OutcomeStatus.FAILED, error=error)


@runtime_checkable
class HandlerExecutor(Protocol):
    """Handler 執行者介面。

    負責把 InvocationContext 交給 Skill 綁定的 callable 執行。
    handler 拋出的例外應收進 HandlerOutcome，
    取消（asyncio.CancelledError）則必須向上傳遞。
    """

    async def execute(self, skill: Skill, context: InvocationContext) -> HandlerOutcome:
        """執行 Skill 的 handler。

        Args:
            skill: 要執行的 Skill
            context: 本次呼叫的上下文

        Returns:
            執行結果
        """
        ...


class CallableHandlerExecutor:
    """在目前行程中直接呼叫 handler 的執行者。

    參數綁定規則：
    - handler 參數註記為 InvocationContext 時，直接傳入 context
    - 否則從 JSON 參數物件取出與參數同名的值，以位置參數傳入
      （keyword-only 參數改以關鍵字傳入）
    - 參數缺少且 handler 有預設值時，不傳入該參數

    同步與非同步 handler 皆支援。
    """

    async def execute(self, skill: Skill, context: InvocationContext) -> HandlerOutcome:
        try:
            returned = await self._call(skill, context)
        except Exception as exc:
            logger.debug(
                'Skill handler 拋出例外',
                extra={'skill_name': skill.name, 'error_type': type(exc).__name__},
            )
            return HandlerOutcome.failed(exc)

        if returned is not None:
            context.result = returned
            return HandlerOutcome.returned(returned)

        # handler 也可以直接寫入 context.result
        if context.result is not None:
            return HandlerOutcome.returned(context.result)
        return HandlerOutcome.empty()

    async def _call(self, skill: Skill, context: InvocationContext) -> Any:
        handler = skill.handler

        args: tuple[Any, ...] = ()
        kwargs: dict[str, Any] = {}
        if _accepts_context(handler):
            args = (context,)
        else:
            arguments = context.parse_arguments()
            name = skill.parameter.name
            if name in arguments:
                if _is_keyword_only(handler, name):
                    kwargs = {name: arguments[name]}
                else:
                    args = (arguments[name],)
            elif not _has_default(handler, name):
                msg = f"Skill '{skill.name}' 缺少必要參數 '{name}'"
                raise SkillBindingError(msg)

        logger.debug('呼叫 Skill handler', extra={'skill_name': skill.name})
        result = handler(*args, **kwargs)
        if inspect.isawaitable(result):
            result = await result
        return result


def _first_parameter(handler: Any) -> inspect.Parameter | None:
    parameters = list(inspect.signature(handler).parameters.values())
    return parameters[0] if parameters else None


def _accepts_context(handler: Any) -> bool:
    first = _first_parameter(handler)
    if first is None:
        return False
    annotation = resolve_annotations(handler).get(first.name, first.annotation)
    return annotation is InvocationContext


def _is_keyword_only(handler: Any, name: str) -> bool:
    parameter = inspect.signature(handler).parameters.get(name)
    return parameter is not None and parameter.kind is inspect.Parameter.KEYWORD_ONLY


def _has_default(handler: Any, name: str) -> bool:
    parameter = inspect.signature(handler).parameters.get(name)
    return parameter is not None and parameter.default is not inspect.Parameter.empty
