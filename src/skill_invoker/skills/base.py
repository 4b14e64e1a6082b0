"""Skill 基礎定義。

定義 Skill 資料結構、handler 輸入參數的形狀描述，以及每次呼叫的 InvocationContext。
"""

from __future__ import annotations

import enum
import inspect
import json
import typing
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from skill_invoker.exceptions import SkillBindingError


class ParameterType(enum.Enum):
    """Handler 輸入參數的宣告型別標籤。

    封閉集合，Schema 推導只依賴這些標籤，不在執行期反射 handler。
    """

    STRING = 'string'
    INT32 = 'int32'
    INT64 = 'int64'
    BOOLEAN = 'boolean'
    FLOAT32 = 'float32'
    FLOAT64 = 'float64'
    DECIMAL = 'decimal'
    COLLECTION = 'collection'
    OTHER = 'other'

    @classmethod
    def from_annotation(cls, annotation: Any) -> ParameterType:
        """將 Python 型別註記轉換為型別標籤。

        依序比對，第一個符合者勝出。bool 必須在 int 之前比對，
        str 雖然可迭代但不視為集合。

        Args:
            annotation: 參數的型別註記（可為 inspect.Parameter.empty）

        Returns:
            對應的 ParameterType
        """
        if annotation is str:
            return cls.STRING
        if annotation is bool:
            return cls.BOOLEAN
        if annotation is int:
            return cls.INT64
        if annotation is float:
            return cls.FLOAT64
        if annotation is Decimal:
            return cls.DECIMAL

        # list[str]、Sequence[int] 等泛型以 origin 判斷
        origin = typing.get_origin(annotation) or annotation
        if (
            isinstance(origin, type)
            and issubclass(origin, Iterable)
            and not issubclass(origin, str)
        ):
            return cls.COLLECTION
        return cls.OTHER


@dataclass(frozen=True)
class ParameterShape:
    """Handler 唯一輸入參數的描述。

    Attributes:
        name: 參數名稱（同時是 JSON 參數物件中的 key）
        declared_type: 宣告型別標籤
    """

    name: str
    declared_type: ParameterType = ParameterType.OTHER

    @classmethod
    def from_callable(cls, handler: Callable[..., Any]) -> ParameterShape:
        """從 callable 的第一個參數推導參數形狀。

        Args:
            handler: Skill 的執行函數

        Returns:
            參數形狀

        Raises:
            ValueError: handler 沒有任何參數，或第一個參數是 *args / **kwargs
        """
        parameters = list(inspect.signature(handler).parameters.values())
        if not parameters:
            msg = f'Skill handler {handler!r} 必須接受一個輸入參數'
            raise ValueError(msg)

        first = parameters[0]
        if first.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            msg = f'Skill handler {handler!r} 的輸入參數不能是 *args 或 **kwargs'
            raise ValueError(msg)
        annotation = resolve_annotations(handler).get(first.name, first.annotation)
        return cls(name=first.name, declared_type=ParameterType.from_annotation(annotation))


def resolve_annotations(handler: Callable[..., Any]) -> dict[str, Any]:
    """解析 handler 的型別註記（支援 from __future__ import annotations）。

    無法解析時回傳空 dict，呼叫端改用 inspect 取得的原始註記。
    """
    try:
        return typing.get_type_hints(handler)
    except (NameError, TypeError):
        return {}


@dataclass(frozen=True)
class Skill:
    """已註冊的 Skill。

    註冊後不可變。registry 只持有 handler 的參照，不複製。

    Attributes:
        name: Skill 名稱（不分大小寫唯一，同時是對外的工具名稱）
        description: 給 LLM 看的用途說明
        handler: 實際執行工作的 callable
        parameter: handler 輸入參數的形狀（只在需要推導 schema 時使用）
        parameter_schema: 預先撰寫的 JSON Schema 文字，None 表示需要推導
    """

    name: str
    description: str
    handler: Callable[..., Any]
    parameter: ParameterShape
    parameter_schema: str | None = None


@dataclass
class InvocationContext:
    """單次呼叫的上下文。

    每次 invoke 建立一個，回傳結果後即丟棄，不跨呼叫共用。

    Attributes:
        arguments: 原始 JSON 參數物件，形如 {"paramName": value}
        result: handler 成功執行後的回傳值
    """

    arguments: bytes | str
    result: Any = None

    def parse_arguments(self) -> dict[str, Any]:
        """將原始參數解析為 dict。

        Returns:
            參數 dict，空白參數視為空物件

        Raises:
            SkillBindingError: 參數不是合法的 UTF-8 或 JSON 物件
        """
        raw = self.arguments
        try:
            if isinstance(raw, (bytes, bytearray)):
                raw = raw.decode('utf-8')
            if not raw.strip():
                return {}
            parsed = json.loads(raw)
        except UnicodeDecodeError as exc:
            msg = f'呼叫參數不是合法的 UTF-8: {exc}'
            raise SkillBindingError(msg) from exc
        except json.JSONDecodeError as exc:
            msg = f'呼叫參數不是合法的 JSON: {exc}'
            raise SkillBindingError(msg) from exc

        if not isinstance(parsed, dict):
            msg = f'呼叫參數必須是 JSON 物件，收到 {type(parsed).__name__}'
            raise SkillBindingError(msg)
        return parsed
