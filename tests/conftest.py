import logging

import pytest

from dockhosts.engine import SyncEngine
from dockhosts.errors import InspectionError
from dockhosts.hosts_manager import HostsFileRenderer
from dockhosts.models import ContainerDetails


class FakeInspector:
    """内存中的 Docker 协作方，inspect 未知 ID 时抛出 InspectionError"""

    def __init__(self, containers=None, running=None):
        self.containers = dict(containers or {})
        self.running = list(running or [])
        self.inspected = []

    def list_running_ids(self):
        return list(self.running)

    def inspect(self, container_id):
        self.inspected.append(container_id)
        details = self.containers.get(container_id)
        if details is None:
            raise InspectionError(container_id, "容器不存在")
        return details


@pytest.fixture
def logger():
    return logging.getLogger("dockhosts-tests")


@pytest.fixture
def hosts_file(tmp_path):
    path = tmp_path / "hosts"
    path.write_text("127.0.0.1 localhost\n")
    return path


@pytest.fixture
def inspector():
    return FakeInspector({
        "c1": ContainerDetails(name="/web", network_address="10.0.0.5"),
        "c2": ContainerDetails(name="/db", network_address="10.0.0.6"),
        "c3": ContainerDetails(name="/noip", network_address=""),
    })


@pytest.fixture
def engine(inspector, hosts_file, logger):
    renderer = HostsFileRenderer(hosts_file, logger)
    return SyncEngine(inspector, renderer, overlay="", logger=logger)


@pytest.fixture
def make_inspector():
    return FakeInspector
