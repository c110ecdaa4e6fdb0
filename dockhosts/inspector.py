"""
容器列举和检查模块
"""

import logging
from typing import List

import docker
from docker.errors import DockerException
from requests.exceptions import RequestException

from dockhosts.errors import InspectionError
from dockhosts.models import ContainerDetails


class ContainerInspector:
    """
    通过 Docker API 列举和检查容器

    只负责与 Docker 通信，条目的生成由 SyncEngine 完成。
    """

    def __init__(self, client: docker.DockerClient, logger: logging.Logger):
        """
        初始化容器检查器

        参数:
            client: Docker 客户端实例
            logger: 日志记录器实例
        """
        self.client = client
        self.logger = logger

    def list_running_ids(self) -> List[str]:
        """
        列出所有运行中容器的 ID，顺序与 Docker 返回的一致

        异常:
            DockerException: 如果 Docker API 通信失败
        """
        containers = self.client.containers.list(all=False)
        self.logger.debug(f"发现 {len(containers)} 个运行中的容器")
        return [container.id for container in containers]

    def inspect(self, container_id: str) -> ContainerDetails:
        """
        检查容器并返回名称和 IP 地址

        优先使用默认网络的 IPAddress；为空时使用第一个有 IP 的网络。
        都没有时地址为空字符串。

        参数:
            container_id: 容器 ID

        返回:
            ContainerDetails 对象

        异常:
            InspectionError: 容器不存在、API 出错、连接失败或返回数据缺少字段
        """
        try:
            attrs = self.client.containers.get(container_id).attrs
            name = attrs['Name']
            settings = attrs.get('NetworkSettings') or {}
        except (DockerException, RequestException) as e:
            raise InspectionError(container_id, str(e)) from e
        except (KeyError, TypeError, AttributeError) as e:
            raise InspectionError(container_id, f"缺少预期字段: {e}") from e

        address = settings.get('IPAddress') or ''
        if not address:
            networks = settings.get('Networks') or {}
            for network_name, network_data in networks.items():
                ip_address = (network_data or {}).get('IPAddress')
                if ip_address:
                    self.logger.debug(
                        f"容器 {name} 使用网络 {network_name}: {ip_address}"
                    )
                    address = ip_address
                    break

        return ContainerDetails(name=name, network_address=address)
