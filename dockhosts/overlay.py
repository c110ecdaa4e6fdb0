"""
静态覆盖文件加载模块
"""

import logging
from pathlib import Path
from typing import Union

from dockhosts.backup import read_file

# 覆盖文件按字节原样透传，非 UTF-8 字节在写回时还原
ENCODING = 'utf-8'
ERRORS = 'surrogateescape'


def load_overlay(path: Union[str, Path], logger: logging.Logger) -> str:
    """
    一次性读取用户维护的静态覆盖文件

    内容作为不透明文本原样返回。文件不存在或不可读时记录日志并返回空字符串，
    没有覆盖文件时容器条目仍然需要同步。

    参数:
        path: 覆盖文件路径
        logger: 日志记录器实例

    返回:
        覆盖文件的完整内容
    """
    try:
        content = read_file(path).decode(ENCODING, ERRORS)
    except FileNotFoundError:
        logger.warning(f"静态覆盖文件不存在: {path}，使用空覆盖")
        return ""
    except OSError as e:
        logger.warning(f"读取静态覆盖文件失败: {path}: {e}，使用空覆盖")
        return ""

    logger.info(f"已加载静态覆盖文件 {path} ({len(content)} 字符)")
    return content
