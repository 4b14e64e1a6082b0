"""參數 Schema 推導測試模組。

涵蓋：
- Rule: 型別標籤應對應到固定的 JSON Schema 型別
- Rule: Python 型別註記應轉換為型別標籤
- Rule: 明確提供的 schema 應原樣使用
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import allure
import pytest

from skill_invoker.skills import (
    ParameterShape,
    ParameterType,
    Skill,
    json_schema_type,
    synthesize_parameter_schema,
)


def _handler(value: Any) -> Any:
    return value


def _make_skill(
    declared_type: ParameterType,
    name: str = 'p',
    parameter_schema: str | None = None,
) -> Skill:
    return Skill(
        name='sample',
        description='測試用 Skill',
        handler=_handler,
        parameter=ParameterShape(name=name, declared_type=declared_type),
        parameter_schema=parameter_schema,
    )


# =============================================================================
# Rule: 型別標籤應對應到固定的 JSON Schema 型別
# =============================================================================


@allure.feature('Schema 推導')
@allure.story('型別標籤應對應到固定的 JSON Schema 型別')
class TestSchemaTypeMapping:
    """型別對應表測試。"""

    @allure.title('推導出的 schema 只有單一屬性')
    @pytest.mark.parametrize(
        ('declared_type', 'expected'),
        [
            (ParameterType.STRING, 'string'),
            (ParameterType.INT32, 'integer'),
            (ParameterType.INT64, 'integer'),
            (ParameterType.BOOLEAN, 'boolean'),
            (ParameterType.FLOAT32, 'number'),
            (ParameterType.FLOAT64, 'number'),
            (ParameterType.DECIMAL, 'number'),
            (ParameterType.COLLECTION, 'array'),
            (ParameterType.OTHER, 'string'),
        ],
    )
    def test_inferred_schema(self, declared_type: ParameterType, expected: str) -> None:
        schema = synthesize_parameter_schema(_make_skill(declared_type))

        assert json.loads(schema) == {
            'type': 'object',
            'properties': {'p': {'type': expected}},
        }
        assert json_schema_type(declared_type) == expected

    @allure.title('推導結果為精簡 JSON 且每次相同')
    def test_inferred_schema_is_compact_and_deterministic(self) -> None:
        skill = _make_skill(ParameterType.STRING, name='text')

        first = synthesize_parameter_schema(skill)
        second = synthesize_parameter_schema(skill)

        assert first == '{"type":"object","properties":{"text":{"type":"string"}}}'
        assert first == second


# =============================================================================
# Rule: Python 型別註記應轉換為型別標籤
# =============================================================================


class _Custom:
    pass


@allure.feature('Schema 推導')
@allure.story('Python 型別註記應轉換為型別標籤')
class TestAnnotationMapping:
    """型別註記轉換測試。"""

    @allure.title('常見型別註記')
    @pytest.mark.parametrize(
        ('annotation', 'expected'),
        [
            (str, ParameterType.STRING),
            (bool, ParameterType.BOOLEAN),
            (int, ParameterType.INT64),
            (float, ParameterType.FLOAT64),
            (Decimal, ParameterType.DECIMAL),
            (list, ParameterType.COLLECTION),
            (list[str], ParameterType.COLLECTION),
            (tuple[int, ...], ParameterType.COLLECTION),
            (set[int], ParameterType.COLLECTION),
            (Sequence[str], ParameterType.COLLECTION),
            (_Custom, ParameterType.OTHER),
            (None, ParameterType.OTHER),
        ],
    )
    def test_from_annotation(self, annotation: Any, expected: ParameterType) -> None:
        assert ParameterType.from_annotation(annotation) is expected

    @allure.title('從 callable 推導參數形狀（支援延後評估的註記）')
    def test_from_callable_resolves_string_annotations(self) -> None:
        def handler(amount: Decimal, note: str = '') -> None:
            return None

        shape = ParameterShape.from_callable(handler)

        assert shape == ParameterShape(name='amount', declared_type=ParameterType.DECIMAL)

    @allure.title('沒有型別註記時使用 OTHER')
    def test_from_callable_without_annotation(self) -> None:
        def handler(payload):  # type: ignore[no-untyped-def]
            return payload

        shape = ParameterShape.from_callable(handler)

        assert shape.declared_type is ParameterType.OTHER
        assert json.loads(
            synthesize_parameter_schema(
                Skill(name='raw', description='', handler=handler, parameter=shape)
            )
        ) == {'type': 'object', 'properties': {'payload': {'type': 'string'}}}


# =============================================================================
# Rule: 明確提供的 schema 應原樣使用
# =============================================================================


@allure.feature('Schema 推導')
@allure.story('明確提供的 schema 應原樣使用')
class TestExplicitSchema:
    """明確 schema 測試。"""

    @allure.title('明確 schema 原樣回傳')
    def test_explicit_schema_returned_verbatim(self) -> None:
        explicit = '{ "type": "object", "properties": { "city": { "type": "string" } } }'

        schema = synthesize_parameter_schema(
            _make_skill(ParameterType.INT64, parameter_schema=explicit)
        )

        assert schema == explicit

    @allure.title('明確 schema 不做驗證')
    def test_explicit_schema_not_validated(self) -> None:
        schema = synthesize_parameter_schema(
            _make_skill(ParameterType.STRING, parameter_schema='not json')
        )

        assert schema == 'not json'
