"""Skill 呼叫派送。

將 LLM 的工具呼叫派送到 Skill handler，並回傳 JSON 結果。
"""

from skill_invoker.invoker.dispatcher import SkillInvoker
from skill_invoker.invoker.executor import (
    CallableHandlerExecutor,
    HandlerExecutor,
    HandlerOutcome,
    OutcomeStatus,
)

__all__ = [
    'CallableHandlerExecutor',
    'HandlerExecutor',
    'HandlerOutcome',
    'OutcomeStatus',
    'SkillInvoker',
]
