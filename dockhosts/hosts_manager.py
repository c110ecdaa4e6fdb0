"""
Hosts 文件渲染模块，支持原子性更新
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, Union

from dockhosts.errors import RenderError
from dockhosts.models import HostEntry
from dockhosts.overlay import ENCODING, ERRORS

# 静态覆盖内容与容器条目之间的三个空行
SEPARATOR = "\n\n\n"


def render_content(overlay: str, entries: Iterable[HostEntry]) -> str:
    """
    构建 hosts 文件内容

    格式: 覆盖文件原文 + 三个空行 + 每个容器一行 "<IP> <主机名>"

    参数:
        overlay: 静态覆盖文件内容
        entries: 当前注册表中的条目

    返回:
        完整的文件内容
    """
    parts = [overlay]
    if overlay and not overlay.endswith('\n'):
        parts.append('\n')
    parts.append(SEPARATOR)
    for entry in entries:
        parts.append(entry.to_hosts_line() + '\n')
    return ''.join(parts)


class HostsFileRenderer:
    """
    将覆盖内容和注册表写入 hosts 文件

    使用原子性文件操作（临时文件 + 重命名），
    resolver 等并发读者不会看到写了一半的文件。
    """

    FILE_MODE = 0o644

    def __init__(self, hosts_path: Union[str, Path], logger: logging.Logger):
        """
        初始化 hosts 文件渲染器

        参数:
            hosts_path: 目标 hosts 文件路径
            logger: 日志记录器实例
        """
        self.hosts_path = Path(hosts_path)
        self.logger = logger

    def write(self, overlay: str, entries: Iterable[HostEntry]) -> str:
        """
        原子性地整体替换 hosts 文件

        参数:
            overlay: 静态覆盖文件内容
            entries: 要写入的 HostEntry 对象

        返回:
            写入的内容

        异常:
            RenderError: 如果文件系统操作失败或内容无法编码
        """
        entries = list(entries)
        content = render_content(overlay, entries)

        temp_path = None
        try:
            # 写入临时文件（同一目录，保证 rename 在同一文件系统内）
            temp_fd, temp_path = tempfile.mkstemp(
                dir=self.hosts_path.parent,
                prefix='.hosts.tmp.',
                text=True
            )
            with os.fdopen(temp_fd, 'w', encoding=ENCODING, errors=ERRORS, newline='') as f:
                f.write(content)
            os.chmod(temp_path, self.FILE_MODE)
            os.replace(temp_path, self.hosts_path)

        except (OSError, UnicodeError) as e:
            self._discard(temp_path)
            self.logger.error(f"写入 hosts 文件失败: {self.hosts_path}: {e}")
            raise RenderError(f"无法写入 {self.hosts_path}: {e}") from e
        except BaseException:
            # 包括信号处理器触发的 SystemExit
            self._discard(temp_path)
            raise

        self.logger.info(f"已更新 {len(entries)} 条 host 记录")
        self.logger.debug(f"{self.hosts_path} 内容:\n{content}")
        return content

    @staticmethod
    def _discard(temp_path) -> None:
        if temp_path and os.path.exists(temp_path):
            os.unlink(temp_path)
