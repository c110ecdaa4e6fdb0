"""
dockhosts - 根据运行中的 Docker 容器同步 hosts 文件
"""

__version__ = "1.0.0"
__author__ = "dockhosts Project"

from dockhosts.app import DockerHoster
from dockhosts.config import Config
from dockhosts.engine import SyncEngine
from dockhosts.models import HostEntry, LifecycleEvent

__all__ = ["DockerHoster", "Config", "SyncEngine", "HostEntry", "LifecycleEvent"]
