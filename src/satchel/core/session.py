"""HTTP session setup for the daemon API."""

import aiohttp

from .types import DaemonConfig


def create_connector(config: DaemonConfig) -> aiohttp.BaseConnector:
    """Create a unix socket or TCP connector for the configured host."""
    if config.is_unix:
        return aiohttp.UnixConnector(path=config.socket_path)

    context = config.ssl_context()
    return aiohttp.TCPConnector(ssl=context if context is not None else False)


async def create_session(config: DaemonConfig) -> aiohttp.ClientSession:
    """Create a client session bound to the daemon connector."""
    return aiohttp.ClientSession(
        connector=create_connector(config),
        timeout=aiohttp.ClientTimeout(total=config.timeout),
    )
