"""讀寫鎖測試模組。"""

from __future__ import annotations

import threading
import time

import allure

from skill_invoker.skills.locking import ReadWriteLock


@allure.feature('Skill Registry')
@allure.story('並行操作不應破壞註冊表')
class TestReadWriteLock:
    """讀寫鎖測試。"""

    @allure.title('多個讀取者可以同時持有鎖')
    def test_readers_share(self) -> None:
        lock = ReadWriteLock()
        inside = threading.Barrier(3, timeout=2)

        def reader() -> None:
            with lock.read():
                # 三個讀取者都進入後才會通過
                inside.wait()

        threads = [threading.Thread(target=reader) for _ in range(3)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=2)

        assert not inside.broken

    @allure.title('寫入者與讀取者互斥')
    def test_writer_excludes_readers(self) -> None:
        lock = ReadWriteLock()
        events: list[str] = []
        writer_inside = threading.Event()

        def writer() -> None:
            with lock.write():
                writer_inside.set()
                events.append('write-start')
                time.sleep(0.05)
                events.append('write-end')

        def reader() -> None:
            writer_inside.wait()
            with lock.read():
                events.append('read')

        threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=2)

        assert events == ['write-start', 'write-end', 'read']
