"""
Tests for free port lookup.
"""

import socket

from dynamo_fixtures import ports
from dynamo_fixtures.ports import find_available_port


class TestFindAvailablePort:
    """Test find_available_port."""

    def test_repeated_calls_return_valid_ports(self):
        for _ in range(25):
            port = find_available_port()
            assert 1024 <= port <= 65535

    def test_probe_socket_is_closed(self, monkeypatch):
        """The probe socket must not leak a file descriptor."""
        opened = []
        original_socket = socket.socket

        class RecordingSocket(original_socket):
            def __init__(self, *args, **kwargs):
                super().__init__(*args, **kwargs)
                opened.append(self)

        monkeypatch.setattr(ports.socket, "socket", RecordingSocket)

        find_available_port()

        assert len(opened) == 1
        assert opened[0].fileno() == -1

    def test_returned_port_can_be_bound(self):
        port = find_available_port("127.0.0.1")

        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.bind(("127.0.0.1", port))
            assert s.getsockname()[1] == port
