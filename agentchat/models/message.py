"""对话消息协议：Message、FunctionCall。

作为 Agent、GroupChat 与 Provider 之间的统一数据结构；消息创建后不可修改，
只能追加到历史或群聊记录中。
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

Role = Literal["system", "user", "assistant", "function"]


class FunctionCall(BaseModel):
    """函数调用描述：函数名与序列化后的参数（当前流程未使用，仅保留字段）。"""

    model_config = ConfigDict(frozen=True)

    name: str
    arguments: str = ""


class Message(BaseModel):
    """对话中的单条消息：角色、内容、发送者名称；按字段做结构相等比较。"""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str
    name: str | None = None
    function_call: FunctionCall | None = None

    def to_wire(self) -> dict:
        """转为 chat-completion 接口使用的 dict；未设置 name 时不带该键。"""
        data = {"role": self.role, "content": self.content}
        if self.name:
            data["name"] = self.name
        return data

    def preview(self, limit: int = 80) -> str:
        return (self.content[:limit] + "…") if len(self.content) > limit else self.content
