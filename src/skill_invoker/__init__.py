"""Skill Invoker - 讓 AI Agent 依名稱呼叫外部 Skill 的派送核心。"""

__version__ = '0.1.0'

from skill_invoker.config import SkillInvokerConfig
from skill_invoker.exceptions import (
    DuplicateSkillError,
    InvalidCallError,
    SkillBindingError,
    SkillInvokerError,
    UnknownSkillError,
)
from skill_invoker.invoker import CallableHandlerExecutor, HandlerExecutor, SkillInvoker
from skill_invoker.setup import create_skill_invoker
from skill_invoker.skills import (
    InvocationContext,
    ParameterShape,
    ParameterType,
    Skill,
    SkillRegistry,
)
from skill_invoker.types import ToolCall, ToolDefinition

__all__ = [
    'CallableHandlerExecutor',
    'DuplicateSkillError',
    'HandlerExecutor',
    'InvalidCallError',
    'InvocationContext',
    'ParameterShape',
    'ParameterType',
    'Skill',
    'SkillBindingError',
    'SkillInvoker',
    'SkillInvokerConfig',
    'SkillInvokerError',
    'SkillRegistry',
    'ToolCall',
    'ToolDefinition',
    'UnknownSkillError',
    'create_skill_invoker',
]
