"""型別定義模組。

定義呼叫請求與工具定義等對外交換的資料結構。
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Literal, TypedDict


class ToolUseBlock(TypedDict):
    """LLM 回應中的工具調用區塊。"""

    type: Literal['tool_use']
    id: str
    name: str
    input: dict[str, object]


@dataclass(frozen=True)
class ToolCall:
    """Agent 發出的單次工具呼叫。

    Attributes:
        function_name: 要呼叫的 Skill 名稱
        function_arguments: 原始 JSON 參數物件（不做解析，原樣交給 handler 綁定）
        id: 呼叫識別碼（由 LLM 指派，可選）
    """

    function_name: str | None
    function_arguments: bytes | str = b'{}'
    id: str = ''

    @classmethod
    def from_tool_use_block(cls, block: ToolUseBlock) -> ToolCall:
        """從 tool_use 區塊建立呼叫，input 重新編碼為 JSON bytes。"""
        arguments = json.dumps(block['input'], ensure_ascii=False).encode('utf-8')
        return cls(function_name=block['name'], function_arguments=arguments, id=block['id'])


@dataclass(frozen=True)
class ToolDefinition:
    """公開給 LLM 的工具定義。

    每次查詢時依 registry 當下內容重新產生，不會被保存。

    Attributes:
        name: 工具名稱
        description: 工具描述
        parameters: UTF-8 編碼的參數 JSON Schema
    """

    name: str
    description: str
    parameters: bytes

    def parameters_schema(self) -> dict[str, Any]:
        """解析參數 schema。"""
        return json.loads(self.parameters)

    def to_openai_tool(self) -> dict[str, Any]:
        """轉為 OpenAI function calling 格式。"""
        return {
            'type': 'function',
            'function': {
                'name': self.name,
                'description': self.description,
                'parameters': self.parameters_schema(),
            },
        }

    def to_anthropic_tool(self) -> dict[str, Any]:
        """轉為 Anthropic tool use 格式。"""
        return {
            'name': self.name,
            'description': self.description,
            'input_schema': self.parameters_schema(),
        }
