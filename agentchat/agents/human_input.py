"""人类输入能力：HumanInputProvider 抽象与终端实现。

prompt_for_input 返回人类输入的文本；返回 None 表示「不输入」，由 UserProxyAgent 决定
是自动继续还是结束对话。
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor

logger = logging.getLogger(__name__)

# input() 会阻塞，放到线程池里执行，避免卡住事件循环
_executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="human_input")


class HumanInputProvider(ABC):
    """向人类索要一条消息的能力。"""

    @abstractmethod
    async def prompt_for_input(self, context: str) -> str | None:
        """展示 context 并等待输入；不输入时返回 None。"""
        ...


class ConsoleInputProvider(HumanInputProvider):
    """从终端读取一行输入；空行视为不输入。

    限制：取消（CancellationToken）只会中止等待中的协程，已经阻塞在 input() 上的
    工作线程无法被打断，会继续占用唯一的输入线程直到读到一行。因此取消后的下一次
    prompt 会排在它后面，用户接下来输入的第一行会被这次已放弃的调用读走并丢弃，
    需要再输入一次。
    """

    async def prompt_for_input(self, context: str) -> str | None:
        loop = asyncio.get_running_loop()
        try:
            text = await loop.run_in_executor(_executor, input, context)
        except EOFError:
            logger.info("[INPUT] stdin closed, treating as no input")
            return None
        text = text.strip()
        return text or None
