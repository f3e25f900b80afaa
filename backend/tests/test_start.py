import os
import socket

import pytest

from start import first_free_port, sqlite_url_in


@pytest.fixture()
def busy_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        s.listen()
        yield s.getsockname()[1]


def test_sqlite_url_points_into_data_dir(tmp_path):
    url = sqlite_url_in(str(tmp_path))
    assert url == "sqlite:///" + os.path.join(str(tmp_path), "data", "calendar.db")


def test_busy_port_is_skipped(busy_port):
    port = first_free_port("127.0.0.1", busy_port, attempts=20)
    assert busy_port < port < busy_port + 20


def test_no_free_port_raises(busy_port):
    with pytest.raises(RuntimeError):
        first_free_port("127.0.0.1", busy_port, attempts=1)
