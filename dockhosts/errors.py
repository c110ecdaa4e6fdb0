"""
dockhosts 异常类型
"""


class HosterError(Exception):
    """所有 dockhosts 异常的基类"""


class BackupError(HosterError):
    """无法读取或备份原始 hosts 文件（致命）"""


class RenderError(HosterError):
    """无法写入目标 hosts 文件（致命）"""


class InspectionError(HosterError):
    """检查单个容器失败（可恢复，事件被丢弃）"""

    def __init__(self, container_id: str, reason: str):
        super().__init__(f"检查容器 {container_id} 失败: {reason}")
        self.container_id = container_id
        self.reason = reason


class EventStreamClosed(HosterError):
    """Docker 事件流意外结束（致命）"""
