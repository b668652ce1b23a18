"""取消令牌：在一次对话中贯穿传递，触发后中止正在进行的后端调用。

用法：
    token = CancellationToken()
    reply = await agent.generate_reply(history, token)
    # 另一个协程中：token.cancel()  →  generate_reply 抛出 CancellationError
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, TypeVar

from agentchat.core.errors import CancellationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CancellationToken:
    """一次性取消信号：cancel() 后所有已关联的 future 被取消，之后的 run() 立即失败。"""

    def __init__(self):
        self._cancelled = False
        self._callbacks: list[Callable[[], Any]] = []

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """触发取消并依次执行已登记的回调；重复调用无副作用。"""
        if self._cancelled:
            return
        self._cancelled = True
        logger.info("[CANCEL] token cancelled: callbacks=%d", len(self._callbacks))
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def add_callback(self, callback: Callable[[], Any]) -> None:
        """登记取消回调；若已取消则立即执行。"""
        if self._cancelled:
            callback()
        else:
            self._callbacks.append(callback)

    def link_future(self, future: asyncio.Future) -> asyncio.Future:
        """把 future 与令牌关联：令牌取消时 future 一并被取消。"""
        self.add_callback(future.cancel)
        return future

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise CancellationError("Operation was cancelled")

    async def run(self, awaitable: Awaitable[T]) -> T:
        """在令牌保护下等待 awaitable：取消时中止底层任务并抛出 CancellationError。"""
        if self._cancelled:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise CancellationError("Operation was cancelled")
        task = asyncio.ensure_future(awaitable)
        self.link_future(task)
        try:
            return await task
        except asyncio.CancelledError:
            # 只有令牌触发的取消才转为 CancellationError，外部任务被取消时照常向上传播
            if self._cancelled:
                raise CancellationError("Operation was cancelled") from None
            raise
        finally:
            if task.cancel in self._callbacks:
                self._callbacks.remove(task.cancel)
