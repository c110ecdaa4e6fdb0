"""
启动时备份原 hosts 文件
"""

import logging
from datetime import date
from pathlib import Path
from typing import Optional, Union

from dockhosts.errors import BackupError

PathLike = Union[str, Path]


def read_file(path: PathLike) -> bytes:
    """
    完整读取文件内容，直到 EOF

    不依赖文件系统报告的大小，/proc 等虚拟文件报告的大小可能为 0。
    """
    chunks = []
    with open(path, 'rb') as f:
        while True:
            chunk = f.read(65536)
            if not chunk:
                break
            chunks.append(chunk)
    return b''.join(chunks)


def backup_path(directory: PathLike, today: date) -> Path:
    """
    计算不会覆盖已有文件的备份路径

    先尝试 hosts.<YYYYMMDD>，已存在时依次尝试 hosts.<YYYYMMDD>.1、.2 ...

    参数:
        directory: 备份目录
        today: 备份日期

    返回:
        未被占用的备份文件路径
    """
    directory = Path(directory)
    datestr = today.strftime('%Y%m%d')
    candidate = directory / f"hosts.{datestr}"
    suffix = 0
    while candidate.exists():
        suffix += 1
        candidate = directory / f"hosts.{datestr}.{suffix}"
    return candidate


def snapshot_hosts_file(
    hosts_path: PathLike,
    backup_dir: PathLike,
    logger: logging.Logger,
    today: Optional[date] = None
) -> Path:
    """
    在覆盖之前将当前 hosts 文件原样复制到带日期的备份文件

    参数:
        hosts_path: 目标 hosts 文件路径
        backup_dir: 备份目录
        logger: 日志记录器实例
        today: 备份日期 (默认: 当天)

    返回:
        新建的备份文件路径

    异常:
        BackupError: 读取原文件或写入备份失败
    """
    try:
        original = read_file(hosts_path)
    except OSError as e:
        logger.error(f"读取 hosts 文件失败: {hosts_path}: {e}")
        raise BackupError(f"无法读取 {hosts_path}: {e}") from e

    target = backup_path(backup_dir, today or date.today())

    try:
        # 'x' 模式保证不会覆盖同名的已有备份
        with open(target, 'xb') as f:
            f.write(original)
    except OSError as e:
        logger.error(f"写入备份文件失败: {target}: {e}")
        raise BackupError(f"无法写入备份 {target}: {e}") from e

    logger.info(f"已备份 {hosts_path} 到 {target} ({len(original)} 字节)")
    return target
