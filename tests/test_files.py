import os
import stat
from datetime import date

import pytest

from dockhosts.backup import backup_path, read_file, snapshot_hosts_file
from dockhosts.errors import BackupError, RenderError
from dockhosts.hosts_manager import HostsFileRenderer, render_content
from dockhosts.models import HostEntry
from dockhosts.overlay import load_overlay

DAY = date(2024, 1, 1)


def test_backup_path_without_existing_files(tmp_path):
    assert backup_path(tmp_path, DAY) == tmp_path / "hosts.20240101"


def test_backup_path_skips_taken_names(tmp_path):
    (tmp_path / "hosts.20240101").write_text("first")
    (tmp_path / "hosts.20240101.1").write_text("second")

    assert backup_path(tmp_path, DAY) == tmp_path / "hosts.20240101.2"


def test_snapshot_copies_contents_verbatim(tmp_path, logger):
    hosts = tmp_path / "hosts"
    hosts.write_bytes(b"127.0.0.1 localhost\r\n::1 ip6-localhost\n")
    backups = tmp_path / "backups"
    backups.mkdir()

    first = snapshot_hosts_file(hosts, backups, logger, today=DAY)
    second = snapshot_hosts_file(hosts, backups, logger, today=DAY)

    assert first.name == "hosts.20240101"
    assert second.name == "hosts.20240101.1"
    assert first.read_bytes() == hosts.read_bytes()
    assert second.read_bytes() == hosts.read_bytes()


def test_snapshot_fails_when_hosts_unreadable(tmp_path, logger):
    with pytest.raises(BackupError):
        snapshot_hosts_file(tmp_path / "nope", tmp_path, logger, today=DAY)
    assert list(tmp_path.iterdir()) == []


def test_snapshot_fails_when_backup_dir_missing(hosts_file, tmp_path, logger):
    with pytest.raises(BackupError):
        snapshot_hosts_file(hosts_file, tmp_path / "absent", logger, today=DAY)


def test_read_file_reads_past_first_chunk(tmp_path):
    path = tmp_path / "big"
    data = b"x" * 200000
    path.write_bytes(data)
    assert read_file(path) == data


def test_overlay_missing_is_empty(tmp_path, logger):
    assert load_overlay(tmp_path / "myhosts", logger) == ""


def test_overlay_unreadable_is_empty(tmp_path, logger):
    assert load_overlay(tmp_path, logger) == ""


def test_overlay_content_is_opaque(tmp_path, logger):
    path = tmp_path / "myhosts"
    path.write_text("# custom\n192.168.1.10 nas\n\n")
    assert load_overlay(path, logger) == "# custom\n192.168.1.10 nas\n\n"


def test_render_content_layout():
    entries = [HostEntry("web", "10.0.0.5"), HostEntry("db", "10.0.0.6")]
    content = render_content("192.168.1.10 nas\n", entries)

    assert content == "192.168.1.10 nas\n\n\n\n10.0.0.5 web\n10.0.0.6 db\n"
    lines = content.split("\n")
    assert lines[:5] == ["192.168.1.10 nas", "", "", "", "10.0.0.5 web"]


def test_render_content_empty_overlay():
    assert render_content("", []) == "\n\n\n"
    assert render_content("", [HostEntry("web", "10.0.0.5")]) == "\n\n\n10.0.0.5 web\n"


def test_render_content_terminates_last_overlay_line():
    content = render_content("192.168.1.10 nas", [])
    assert content.startswith("192.168.1.10 nas")
    assert content == "192.168.1.10 nas\n\n\n\n"


def test_renderer_replaces_file(hosts_file, logger):
    renderer = HostsFileRenderer(hosts_file, logger)
    renderer.write("", [HostEntry("web", "10.0.0.5")])

    assert hosts_file.read_text() == "\n\n\n10.0.0.5 web\n"
    assert stat.S_IMODE(os.stat(hosts_file).st_mode) == 0o644
    assert [p.name for p in hosts_file.parent.iterdir()] == ["hosts"]


def test_renderer_failure_raises_and_cleans_up(tmp_path, logger):
    target = tmp_path / "hosts"
    target.mkdir()
    renderer = HostsFileRenderer(target, logger)

    with pytest.raises(RenderError):
        renderer.write("", [HostEntry("web", "10.0.0.5")])
    assert [p.name for p in tmp_path.iterdir()] == ["hosts"]


def test_non_utf8_overlay_round_trips(tmp_path, hosts_file, logger):
    raw = "192.168.1.10 nas  # café\n".encode("latin-1")
    path = tmp_path / "myhosts"
    path.write_bytes(raw)

    overlay = load_overlay(path, logger)
    assert overlay != ""

    HostsFileRenderer(hosts_file, logger).write(overlay, [HostEntry("web", "10.0.0.5")])
    assert hosts_file.read_bytes() == raw + b"\n\n\n10.0.0.5 web\n"


def test_unencodable_content_raises_render_error(hosts_file, logger):
    renderer = HostsFileRenderer(hosts_file, logger)

    with pytest.raises(RenderError):
        renderer.write("\ud800\n", [])
    assert hosts_file.read_text() == "127.0.0.1 localhost\n"
    assert [p.name for p in hosts_file.parent.iterdir()] == ["hosts"]


def test_interrupted_write_removes_temp_file(hosts_file, logger, monkeypatch):
    def interrupted(src, dst):
        raise SystemExit(0)

    monkeypatch.setattr("dockhosts.hosts_manager.os.replace", interrupted)
    renderer = HostsFileRenderer(hosts_file, logger)

    with pytest.raises(SystemExit):
        renderer.write("", [HostEntry("web", "10.0.0.5")])
    assert [p.name for p in hosts_file.parent.iterdir()] == ["hosts"]
    assert hosts_file.read_text() == "127.0.0.1 localhost\n"
