"""Skill 註冊與 Schema 推導。

以 Skill 為單位對 Agent 公開可呼叫的外部函數。
"""

from skill_invoker.skills.base import InvocationContext, ParameterShape, ParameterType, Skill
from skill_invoker.skills.registry import SkillRegistry
from skill_invoker.skills.schema import json_schema_type, synthesize_parameter_schema

__all__ = [
    'InvocationContext',
    'ParameterShape',
    'ParameterType',
    'Skill',
    'SkillRegistry',
    'json_schema_type',
    'synthesize_parameter_schema',
]
