"""
dockhosts 主应用模块
"""

import logging
import sys
from typing import Optional

import docker
from docker.errors import DockerException

from dockhosts.backup import snapshot_hosts_file
from dockhosts.config import Config
from dockhosts.engine import SyncEngine
from dockhosts.events import DockerEventSource
from dockhosts.hosts_manager import HostsFileRenderer
from dockhosts.inspector import ContainerInspector
from dockhosts.overlay import load_overlay


class DockerHoster:
    """
    主应用控制器，协调所有组件

    管理应用的生命周期：
    - 初始化 Docker 客户端和组件
    - 备份原 hosts 文件并加载静态覆盖内容
    - 启动时扫描现有容器
    - 监控 Docker 事件直到事件流结束
    """

    def __init__(self, config: Config, client: Optional[docker.DockerClient] = None):
        """
        初始化 Docker Hoster 应用

        参数:
            config: 应用配置
            client: 已有的 Docker 客户端 (默认: 根据配置创建)

        异常:
            DockerException: 如果无法连接到 Docker 守护进程
            ValueError: 如果配置无效
        """
        self.config = config
        self.config.validate()

        self.logger = self._setup_logging()

        if client is None:
            client = self._connect()
        self.client = client

        # 初始化组件
        self.inspector = ContainerInspector(self.client, self.logger)
        self.event_source = DockerEventSource(self.client, self.logger)
        self.renderer = HostsFileRenderer(
            config.hosts_file_path,
            self.logger
        )
        self.engine = SyncEngine(
            self.inspector,
            self.renderer,
            logger=self.logger
        )

    def _connect(self) -> docker.DockerClient:
        try:
            if self.config.docker_host:
                self.logger.info(f"正在连接到 Docker: {self.config.docker_host}")
                client = docker.DockerClient(base_url=self.config.docker_host)
            else:
                self.logger.info("使用环境检测连接到 Docker")
                client = docker.from_env()

            # 测试连接
            client.ping()
            self.logger.info("成功连接到 Docker 守护进程")
            return client

        except DockerException as e:
            self.logger.error(f"连接到 Docker 守护进程失败: {e}")
            self.logger.error(
                "请确保 Docker 正在运行且 socket 可访问。"
                "如果使用自定义 socket，请检查 DOCKER_HOST 环境变量。"
            )
            raise

    def _setup_logging(self) -> logging.Logger:
        """
        配置日志系统

        返回:
            配置好的日志记录器实例
        """
        logger = logging.getLogger('docker-hoster')
        logger.setLevel(self.config.log_level)

        # 避免重复的处理器
        if logger.handlers:
            return logger

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(self.config.log_level)

        # 格式: 时间戳 - 名称 - 级别 - 消息
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)

        logger.addHandler(handler)
        return logger

    def initialize(self) -> None:
        """
        备份原 hosts 文件并加载静态覆盖内容

        异常:
            BackupError: 如果无法备份原 hosts 文件
        """
        self.logger.info("=" * 60)
        self.logger.info("Docker Hoster 启动中...")
        self.logger.info(f"Hosts 文件: {self.config.hosts_file_path}")
        self.logger.info(f"静态覆盖文件: {self.config.custom_hosts_path}")
        self.logger.info(f"备份目录: {self.config.backup_dir}")
        self.logger.info("=" * 60)

        snapshot_hosts_file(
            self.config.hosts_file_path,
            self.config.backup_dir,
            self.logger
        )
        self.engine.overlay = load_overlay(
            self.config.custom_hosts_path,
            self.logger
        )

    def run(self) -> None:
        """
        启动主事件循环

        先订阅事件，再扫描运行中的容器，然后阻塞处理事件。
        只有调用 cleanup() 后才会正常返回。

        异常:
            BackupError, RenderError: 文件操作失败
            EventStreamClosed: 事件流意外结束
            DockerException: Docker API 通信失败
        """
        self.initialize()
        events = self.event_source.subscribe()
        self.engine.load_running()
        self.engine.consume(events)

    def cleanup(self) -> None:
        """
        清理：停止事件循环并关闭 Docker 客户端

        hosts 文件保持最后一次渲染的内容。
        """
        self.logger.info("正在关闭 Docker Hoster...")

        self.engine.stop()
        try:
            self.event_source.stop()
            self.client.close()
            self.logger.info("清理成功完成")
        except Exception as e:
            self.logger.error(f"清理期间出错: {e}", exc_info=True)
