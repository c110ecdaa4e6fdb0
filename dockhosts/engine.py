"""
容器事件同步引擎
"""

import logging
from typing import Iterable, List, Optional

from dockhosts.errors import EventStreamClosed, InspectionError
from dockhosts.hosts_manager import HostsFileRenderer
from dockhosts.models import HostEntry, LifecycleEvent
from dockhosts.registry import ContainerRegistry


class SyncEngine:
    """
    根据容器生命周期事件维护注册表并重写 hosts 文件

    引擎独占注册表、静态覆盖内容和 Docker 协作方句柄。
    所有操作在同一线程中顺序执行，每次修改注册表后立即渲染。

    状态机（每个容器 ID）:
        不存在 --start/初始扫描（检查成功）--> 存在
        存在   --start（检查成功）---------> 存在（条目被整体替换）
        存在   --die---------------------> 不存在
    """

    START = 'start'
    DIE = 'die'

    def __init__(
        self,
        inspector,
        renderer: HostsFileRenderer,
        overlay: str = "",
        logger: Optional[logging.Logger] = None
    ):
        """
        初始化同步引擎

        参数:
            inspector: 提供 list_running_ids() 和 inspect(id) 的对象
            renderer: hosts 文件渲染器
            overlay: 静态覆盖内容
            logger: 日志记录器实例
        """
        self.inspector = inspector
        self.renderer = renderer
        self.overlay = overlay
        self.logger = logger or logging.getLogger('docker-hoster')
        self.registry = ContainerRegistry()
        self._stopping = False

    def add_container(self, container_id: str) -> bool:
        """
        检查容器并将其加入注册表

        检查失败时丢弃该事件，注册表保持不变，也不重写文件。

        参数:
            container_id: 容器 ID

        返回:
            加入成功返回 True

        异常:
            RenderError: 如果 hosts 文件写入失败
        """
        try:
            details = self.inspector.inspect(container_id)
        except InspectionError as e:
            self.logger.error(f"{e}，忽略该事件")
            return False

        entry = HostEntry(
            name=details.name.lstrip('/'),
            address=details.network_address
        )
        previous = self.registry.put(container_id, entry)

        if previous is None:
            self.logger.info(f"已添加主机记录: {entry} ({container_id[:12]})")
        else:
            self.logger.info(
                f"已替换主机记录: {previous} => {entry} ({container_id[:12]})"
            )
        if not entry.address:
            self.logger.warning(f"容器 {entry.name} 没有 IP 地址")

        self.render()
        return True

    def remove_container(self, container_id: str) -> None:
        """
        从注册表中移除容器，不存在时只重写文件

        异常:
            RenderError: 如果 hosts 文件写入失败
        """
        removed = self.registry.remove(container_id)
        if removed is not None:
            self.logger.info(f"已移除主机记录: {removed} ({container_id[:12]})")
        else:
            self.logger.debug(f"容器 {container_id[:12]} 不在注册表中")

        self.render()

    def load_running(self) -> int:
        """
        扫描所有运行中的容器并逐个加入注册表

        返回:
            成功加入的容器数

        异常:
            DockerException: 如果无法列举容器
            RenderError: 如果 hosts 文件写入失败
        """
        container_ids: List[str] = self.inspector.list_running_ids()
        self.logger.info(f"启动时发现 {len(container_ids)} 个运行中的容器")

        added = 0
        for container_id in container_ids:
            if self.add_container(container_id):
                added += 1
        return added

    def handle_event(self, event: LifecycleEvent) -> None:
        """
        处理单个生命周期事件

        start 触发添加，die 触发移除，其他状态忽略。
        """
        if event.status == self.START:
            self.logger.info(f"容器事件: start - {event.id[:12]}")
            self.add_container(event.id)
        elif event.status == self.DIE:
            self.logger.info(f"容器事件: die - {event.id[:12]}")
            self.remove_container(event.id)
        else:
            self.logger.debug(f"忽略容器事件: {event.status} - {event.id[:12]}")

    def consume(self, events: Iterable[LifecycleEvent]) -> None:
        """
        顺序消费事件直到事件源结束

        参数:
            events: LifecycleEvent 序列

        异常:
            EventStreamClosed: 事件源在未调用 stop() 的情况下结束
            RenderError: 如果 hosts 文件写入失败
        """
        self.logger.info("正在监听 Docker 事件...")
        for event in events:
            if self._stopping:
                break
            self.handle_event(event)

        if self._stopping:
            self.logger.info("事件循环已停止")
            return

        raise EventStreamClosed("Docker 事件流意外结束，注册表将不再更新")

    def render(self) -> str:
        """
        用当前覆盖内容和注册表重写 hosts 文件

        异常:
            RenderError: 如果 hosts 文件写入失败
        """
        return self.renderer.write(self.overlay, self.registry.entries())

    def stop(self) -> None:
        """请求事件循环在下一个事件或事件源关闭时退出"""
        self._stopping = True
