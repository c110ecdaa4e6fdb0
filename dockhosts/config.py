"""
配置管理模块，支持环境变量
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Config:
    """应用配置类，从环境变量加载配置"""

    hosts_file_path: str = "/etc/hosts"
    custom_hosts_path: str = "./myhosts"
    backup_dir: str = "."
    docker_host: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """
        从环境变量加载配置

        环境变量说明:
            HOSTS_FILE: 目标 hosts 文件路径 (默认: /etc/hosts)
            CUSTOM_HOSTS_FILE: 静态覆盖文件路径 (默认: ./myhosts)
            BACKUP_DIR: 启动时备份原 hosts 文件的目录 (默认: 当前目录)
            DOCKER_HOST: Docker 守护进程 socket URL (默认: 自动检测)
            LOG_LEVEL: 日志级别 (默认: INFO)
        """
        return cls(
            hosts_file_path=os.getenv("HOSTS_FILE", "/etc/hosts"),
            custom_hosts_path=os.getenv("CUSTOM_HOSTS_FILE", "./myhosts"),
            backup_dir=os.getenv("BACKUP_DIR", "."),
            docker_host=os.getenv("DOCKER_HOST"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper()
        )

    def validate(self) -> None:
        """验证配置是否有效"""
        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level not in valid_log_levels:
            raise ValueError(
                f"无效的 LOG_LEVEL: {self.log_level}. "
                f"必须是以下之一: {', '.join(sorted(valid_log_levels))}"
            )

        for field_name in ("hosts_file_path", "custom_hosts_path", "backup_dir"):
            if not getattr(self, field_name):
                raise ValueError(f"配置项 {field_name} 不能为空")
