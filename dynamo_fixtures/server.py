"""
In-memory DynamoDB server for local test runs.

Each LocalDynamoServer runs moto's server in its own Python process, so every
server holds its own in-memory data. Two servers alive at the same time never
see each other's tables, and in-process ``mock_aws`` state is untouched.

Everything the server needs is passed in through LocalServerConfig; nothing is
configured as a side effect of importing or constructing objects.
"""

import logging
import subprocess
import sys
import time
from dataclasses import dataclass
from typing import List, Optional

import requests

from .config import DEFAULT_HOST, DEFAULT_REGION

logger = logging.getLogger(__name__)

ENDPOINT_HOST = "localhost"
RESET_PATH = "/moto-api/reset"
READY_PATH = "/moto-api/"
POLL_INTERVAL = 0.1


@dataclass(frozen=True)
class LocalServerConfig:
    """Launch options for the local in-memory server."""

    host: str = DEFAULT_HOST
    access_key: str = "access"
    secret_key: str = "secret"
    region_name: str = DEFAULT_REGION
    verbose: bool = False
    start_timeout: float = 30.0
    stop_timeout: float = 10.0
    request_timeout: float = 10.0


class LocalDynamoServer:
    """
    A single in-memory DynamoDB server bound to one port.

    Example:
        >>> server = LocalDynamoServer(port=8123)
        >>> server.start()
        >>> server.endpoint_url
        'http://localhost:8123'
        >>> server.stop()
    """

    def __init__(self, port: int, config: Optional[LocalServerConfig] = None):
        self.port = port
        self.config = config or LocalServerConfig()
        self._process: Optional[subprocess.Popen] = None

    @property
    def endpoint_url(self) -> str:
        return f"http://{ENDPOINT_HOST}:{self.port}"

    @property
    def running(self) -> bool:
        return self._process is not None

    def command(self) -> List[str]:
        """Command line used to launch the server process."""
        return [
            sys.executable, "-m", "moto.server",
            "-H", self.config.host,
            "-p", str(self.port),
        ]

    def start(self) -> None:
        """Start the server process and block until it accepts requests."""
        if self._process is not None:
            raise RuntimeError(f"Server already running on port {self.port}")

        output = None if self.config.verbose else subprocess.DEVNULL
        process = subprocess.Popen(self.command(), stdout=output, stderr=output)
        self._process = process
        try:
            self._wait_until_ready(process)
        except BaseException:
            self.stop()
            raise
        logger.info(
            f"Local DynamoDB server started on {self.config.host}:{self.port} (pid {process.pid})"
        )

    def _wait_until_ready(self, process: subprocess.Popen) -> None:
        deadline = time.monotonic() + self.config.start_timeout
        while True:
            if process.poll() is not None:
                raise RuntimeError(
                    f"Server process on port {self.port} exited with code {process.returncode}"
                )
            try:
                requests.get(f"{self.endpoint_url}{READY_PATH}", timeout=self.config.request_timeout)
                return
            except requests.exceptions.ConnectionError:
                pass
            if time.monotonic() >= deadline:
                raise TimeoutError(
                    f"Server on port {self.port} not ready within {self.config.start_timeout} seconds"
                )
            time.sleep(POLL_INTERVAL)

    def reset(self) -> None:
        """Drop all tables and items held by this server."""
        response = requests.post(
            f"{self.endpoint_url}{RESET_PATH}",
            timeout=self.config.request_timeout,
        )
        response.raise_for_status()
        logger.info(f"Local DynamoDB server on port {self.port} reset")

    def stop(self) -> None:
        """Stop the server. Stopping a server that is not running does nothing."""
        process, self._process = self._process, None
        if process is None:
            return
        process.terminate()
        try:
            process.wait(timeout=self.config.stop_timeout)
        except subprocess.TimeoutExpired:
            logger.warning(f"Server process {process.pid} did not exit; killing it")
            process.kill()
            process.wait()
        logger.info(f"Local DynamoDB server on port {self.port} stopped")
