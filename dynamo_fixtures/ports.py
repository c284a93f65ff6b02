"""
Free TCP port lookup for the local DynamoDB server.
"""

import logging
import socket

from .config import DEFAULT_HOST

logger = logging.getLogger(__name__)


def find_available_port(host: str = DEFAULT_HOST) -> int:
    """
    Find an unused TCP port on the given interface.

    The probe socket is closed before returning, so another process may take the
    port before the caller binds it. That window is small and accepted for
    sequential test runs.

    Args:
        host: Interface to probe

    Returns:
        Port number assigned by the operating system
    """
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind((host, 0))
        port = s.getsockname()[1]
    logger.info(f"Found available port {port} on {host}")
    return port
