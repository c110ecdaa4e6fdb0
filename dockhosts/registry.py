"""
运行中容器的内存注册表
"""

from typing import Dict, Iterator, List, Optional

from dockhosts.models import HostEntry


class ContainerRegistry:
    """
    容器 ID 到 HostEntry 的映射

    每个容器 ID 最多一条记录。迭代顺序为插入顺序，
    替换已有 ID 时保持其原位置。非线程安全，只由 SyncEngine 修改。
    """

    def __init__(self) -> None:
        self._entries: Dict[str, HostEntry] = {}

    def put(self, container_id: str, entry: HostEntry) -> Optional[HostEntry]:
        """插入或整体替换条目，返回被替换的旧条目"""
        previous = self._entries.get(container_id)
        self._entries[container_id] = entry
        return previous

    def remove(self, container_id: str) -> Optional[HostEntry]:
        """删除条目，不存在时不做任何事"""
        return self._entries.pop(container_id, None)

    def get(self, container_id: str) -> Optional[HostEntry]:
        return self._entries.get(container_id)

    def entries(self) -> List[HostEntry]:
        return list(self._entries.values())

    def snapshot(self) -> Dict[str, HostEntry]:
        return dict(self._entries)

    def __contains__(self, container_id: object) -> bool:
        return container_id in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
