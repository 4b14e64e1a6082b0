"""Skill Registry 模組。

管理 Skill 的註冊、移除與查詢。名稱不分大小寫。
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from skill_invoker.exceptions import DuplicateSkillError
from skill_invoker.skills.base import ParameterShape, Skill
from skill_invoker.skills.locking import ReadWriteLock

logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


def _key(name: str) -> str:
    return name.lower()


class SkillRegistry:
    """Skill 註冊表。

    系統中唯一的共享可變狀態。註冊與移除互斥於所有讀取，
    查詢與列舉之間可以並行。可同時被多個執行緒與 asyncio task 使用。
    """

    def __init__(self) -> None:
        self._skills: dict[str, Skill] = {}
        self._lock = ReadWriteLock()

    def register(
        self,
        name: str,
        description: str,
        handler: Callable[..., Any],
        parameter: ParameterShape | None = None,
        parameter_schema: str | None = None,
    ) -> Skill:
        """註冊 Skill。

        Args:
            name: Skill 名稱
            description: Skill 描述
            handler: 執行函數
            parameter: 輸入參數形狀，未指定時從 handler 簽名推導
            parameter_schema: 預先撰寫的 JSON Schema 文字（可選）

        Returns:
            已註冊的 Skill

        Raises:
            ValueError: 名稱為空白，或 handler 沒有輸入參數
            DuplicateSkillError: 相同名稱（不分大小寫）已存在
        """
        if not name or not name.strip():
            msg = 'Skill 名稱不可為空白'
            raise ValueError(msg)

        if parameter is None:
            parameter = ParameterShape.from_callable(handler)

        skill = Skill(
            name=name,
            description=description,
            handler=handler,
            parameter=parameter,
            parameter_schema=parameter_schema,
        )

        with self._lock.write():
            if _key(name) in self._skills:
                raise DuplicateSkillError(name)
            self._skills[_key(name)] = skill

        logger.info('Skill 已註冊', extra={'skill_name': name})
        return skill

    def skill(
        self,
        name: str | None = None,
        description: str = '',
        parameter_schema: str | None = None,
    ) -> Callable[[F], F]:
        """以 decorator 註冊 Skill。

        未指定名稱時使用函數名稱，未指定描述時使用 docstring 第一行。
        被裝飾的函數原封不動回傳。

        Example:
            >>> registry = SkillRegistry()
            >>> @registry.skill(description='回傳輸入文字')
            ... def echo(text: str) -> str:
            ...     return text
        """

        def decorator(func: F) -> F:
            doc = (func.__doc__ or '').strip()
            self.register(
                name=name or func.__name__,
                description=description or (doc.splitlines()[0] if doc else ''),
                handler=func,
                parameter_schema=parameter_schema,
            )
            return func

        return decorator

    def unregister(self, name: str) -> bool:
        """移除 Skill。

        已在執行中的呼叫持有自己的 Skill 參照，不受影響。

        Args:
            name: Skill 名稱（不分大小寫）

        Returns:
            是否確實移除；名稱不存在時回傳 False
        """
        with self._lock.write():
            removed = self._skills.pop(_key(name), None)

        if removed is None:
            logger.debug('Skill 不存在，略過移除', extra={'skill_name': name})
            return False

        logger.info('Skill 已移除', extra={'skill_name': removed.name})
        return True

    def lookup(self, name: str) -> Skill | None:
        """依名稱取得 Skill。

        Args:
            name: Skill 名稱（不分大小寫）

        Returns:
            Skill 物件，若不存在則回傳 None
        """
        with self._lock.read():
            return self._skills.get(_key(name))

    def list_all(self) -> list[Skill]:
        """取得目前所有 Skill 的快照（依註冊順序）。"""
        with self._lock.read():
            return list(self._skills.values())

    def list_skills(self) -> list[str]:
        """列出所有已註冊的 Skill 名稱。"""
        return [skill.name for skill in self.list_all()]

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._skills)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return self.lookup(name) is not None
