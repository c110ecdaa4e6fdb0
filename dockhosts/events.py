"""
Docker 事件订阅模块
"""

import logging
from typing import Iterator, Optional

import docker

from dockhosts.models import LifecycleEvent


class DockerEventSource:
    """
    将 Docker 事件流转换为 LifecycleEvent 序列

    只产出容器事件。新版 Docker API 不再发送 status/id 字段，
    此时使用 Action 和 Actor.ID。
    """

    def __init__(self, client: docker.DockerClient, logger: logging.Logger):
        """
        初始化事件源

        参数:
            client: Docker 客户端实例
            logger: 日志记录器实例
        """
        self.client = client
        self.logger = logger
        self._stream = None

    def subscribe(self) -> Iterator[LifecycleEvent]:
        """
        订阅 Docker 事件

        立即打开事件流，在列举运行中容器之前调用可避免漏掉中间的事件。

        返回:
            LifecycleEvent 迭代器，事件流关闭时结束

        异常:
            docker.errors.APIError: 如果 Docker API 通信失败
        """
        self._stream = self.client.events(decode=True)
        self.logger.info("已订阅 Docker 事件")
        return self._iter_events(self._stream)

    def _iter_events(self, stream) -> Iterator[LifecycleEvent]:
        for raw in stream:
            event = self.parse_event(raw)
            if event is not None:
                yield event
        self.logger.info("Docker 事件流已结束")

    @staticmethod
    def parse_event(raw: dict) -> Optional[LifecycleEvent]:
        """
        解析单个原始事件

        返回:
            LifecycleEvent，非容器事件或缺少 ID 时返回 None
        """
        if raw.get('Type', 'container') != 'container':
            return None

        container_id = raw.get('id') or (raw.get('Actor') or {}).get('ID')
        if not container_id:
            return None

        status = raw.get('status') or raw.get('Action') or ''
        return LifecycleEvent(id=container_id, status=status)

    def stop(self) -> None:
        """关闭事件流，阻塞中的迭代随之结束"""
        if self._stream is not None:
            self.logger.info("正在关闭事件流...")
            self._stream.close()
            self._stream = None
