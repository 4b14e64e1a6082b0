"""Skill 參數 Schema 推導模組。

為每個 Skill 產生給 LLM 的參數 JSON Schema。
有預先撰寫的 schema 就直接使用，否則從參數形狀推導最小的 object schema。
"""

from __future__ import annotations

import json

from skill_invoker.skills.base import ParameterType, Skill

# 參考: https://platform.openai.com/docs/api-reference/chat/create#chat-create-tools
_JSON_SCHEMA_TYPES: dict[ParameterType, str] = {
    ParameterType.STRING: 'string',
    ParameterType.INT32: 'integer',
    ParameterType.INT64: 'integer',
    ParameterType.BOOLEAN: 'boolean',
    ParameterType.FLOAT32: 'number',
    ParameterType.FLOAT64: 'number',
    ParameterType.DECIMAL: 'number',
    ParameterType.COLLECTION: 'array',
}


def json_schema_type(declared_type: ParameterType) -> str:
    """將型別標籤轉換為 JSON Schema 型別名稱，未知型別退回 string。"""
    return _JSON_SCHEMA_TYPES.get(declared_type, 'string')


def synthesize_parameter_schema(skill: Skill) -> str:
    """產生 Skill 的參數 JSON Schema 文字。

    明確提供的 schema 原樣回傳，不做驗證。推導結果只有一個屬性，
    不含 required 與 description。同一個 Skill 每次輸出完全相同。

    Args:
        skill: 要產生 schema 的 Skill

    Returns:
        JSON Schema 文字
    """
    if skill.parameter_schema is not None:
        return skill.parameter_schema

    schema = {
        'type': 'object',
        'properties': {
            skill.parameter.name: {'type': json_schema_type(skill.parameter.declared_type)},
        },
    }
    return json.dumps(schema, separators=(',', ':'))
