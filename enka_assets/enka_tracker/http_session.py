from typing import Optional

import aiohttp


class SessionProvider:
    """
    Owns the aiohttp session shared by the API client and the reference data
    store. The session is created lazily, on first use inside a running loop.
    An injected session is used as-is and never closed here.
    """

    def __init__(self, session: Optional[aiohttp.ClientSession] = None):
        self._session = session
        self._owned = session is None

    def get_session(self) -> aiohttp.ClientSession:
        if self._session and not self._session.closed:
            return self._session
        timeout = aiohttp.ClientTimeout(total=30, connect=10, sock_connect=10, sock_read=20)
        connector = aiohttp.TCPConnector(limit=100, ttl_dns_cache=300)
        self._session = aiohttp.ClientSession(timeout=timeout, connector=connector)
        self._owned = True
        return self._session

    async def close_session(self) -> None:
        if self._owned and self._session and not self._session.closed:
            await self._session.close()
        if self._owned:
            self._session = None
