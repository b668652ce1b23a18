"""群聊相关配置模型。"""

from __future__ import annotations

from pydantic import BaseModel, Field


class GroupChatConfig(BaseModel):
    """群聊级编排配置：最大轮数与发起者（管理员）名称。"""

    max_round: int = Field(default=10, ge=1)
    admin_name: str = "Admin"
