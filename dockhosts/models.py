"""
dockhosts 数据模型
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class HostEntry:
    """
    代表 hosts 文件中的单个容器条目

    属性:
        name: 容器名（已去掉开头的 /）
        address: 容器的 IP 地址，容器没有地址时为空字符串
    """

    name: str
    address: str

    def to_hosts_line(self) -> str:
        """
        转换为 hosts 文件行格式

        格式: <IP> <主机名>

        返回:
            格式化的 hosts 文件行
        """
        return f"{self.address} {self.name}"

    def __str__(self) -> str:
        return f"{self.name} -> {self.address}"


@dataclass(frozen=True)
class ContainerDetails:
    """Docker 检查容器后返回的原始信息"""

    name: str
    network_address: str


@dataclass(frozen=True)
class LifecycleEvent:
    """容器生命周期事件，status 为任意字符串"""

    id: str
    status: str
