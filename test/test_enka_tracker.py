import asyncio
import unittest

import aiohttp

from enka_assets.enka_tracker import EnkaApiClient
from enka_assets.enka_tracker.http_session import SessionProvider
from enka_assets.lib.config import AssetConfig
from enka_assets.lib.errors import (
    EnkaApiError,
    EnkaInvalidResponseError,
    EnkaRateLimitError,
    EnkaTransportError,
)
from fakes import FakeSession, PLAYER_RESPONSE, PLAYER_UID, PLAYER_URL


class TestEnkaTracker(unittest.IsolatedAsyncioTestCase):

    async def asyncSetUp(self):
        self.session = FakeSession()
        self.client = EnkaApiClient(AssetConfig(user_agent="tracker-test/2.0"), SessionProvider(self.session))

    async def asyncTearDown(self):
        await self.client.session_provider.close_session()
        self.assertFalse(self.session.closed, "Injected sessions are closed by their owner")

    def test_build_player_url(self):
        self.assertEqual(self.client.build_player_url(PLAYER_UID), PLAYER_URL)
        self.assertEqual(self.client.build_player_url(123, info=False), "https://enka.network/api/uid/123")

    async def test_fetch_player_data(self):
        response = await self.client.get_player_data(PLAYER_UID)
        player = response["playerInfo"]

        self.assertEqual(player["nickname"], PLAYER_RESPONSE["playerInfo"]["nickname"])
        self.assertEqual(response["ttl"], 60)
        self.assertEqual(response["avatarInfoList"], PLAYER_RESPONSE["avatarInfoList"])
        self.assertEqual(self.session.calls, [(PLAYER_URL, {"User-Agent": "tracker-test/2.0"})])

    async def test_non_success_status_carries_code(self):
        self.session.routes[PLAYER_URL] = (404, {})
        with self.assertRaises(EnkaApiError) as cm:
            await self.client.fetch_player_data(PLAYER_UID)
        self.assertEqual(cm.exception.status_code, 404)
        self.assertEqual(cm.exception.code, "API_ERROR")

    async def test_rate_limit_is_recognised(self):
        self.session.routes[PLAYER_URL] = (429, {})
        with self.assertRaises(EnkaRateLimitError) as cm:
            await self.client.get_player_data(PLAYER_UID)
        self.assertEqual(cm.exception.status_code, 429)
        self.assertIn("try again later", str(cm.exception))
        self.assertEqual(self.session.calls_to(PLAYER_URL), 1, "No retry is performed")

    async def test_missing_player_info(self):
        self.session.routes[PLAYER_URL] = (200, {"ttl": 60})
        with self.assertRaises(EnkaInvalidResponseError):
            await self.client.get_player_data(PLAYER_UID)

    async def test_malformed_body(self):
        self.session.routes[PLAYER_URL] = (200, "<html>maintenance</html>")
        with self.assertRaises(EnkaApiError) as cm:
            await self.client.get_player_data(PLAYER_UID)
        self.assertNotIsInstance(cm.exception, EnkaInvalidResponseError)

    async def test_network_error(self):
        self.session.routes[PLAYER_URL] = aiohttp.ClientConnectionError("connection refused")
        with self.assertRaises(EnkaTransportError):
            await self.client.get_player_data(PLAYER_UID)

    async def test_timeout(self):
        self.session.routes[PLAYER_URL] = asyncio.TimeoutError()
        with self.assertRaises(EnkaTransportError):
            await self.client.get_player_data(PLAYER_UID)

    def test_update_config(self):
        self.client.update_config(api_url="http://localhost:8080/api")
        self.assertEqual(self.client.get_config().api_url, "http://localhost:8080/api")
        self.assertEqual(self.client.get_config().user_agent, "tracker-test/2.0")


class TestSessionProvider(unittest.IsolatedAsyncioTestCase):

    async def test_owned_session_is_created_lazily_and_closed(self):
        provider = SessionProvider()
        session = provider.get_session()
        self.assertIsInstance(session, aiohttp.ClientSession)
        self.assertIs(provider.get_session(), session)
        await provider.close_session()
        self.assertTrue(session.closed)

    async def test_injected_session_is_not_closed(self):
        fake = FakeSession()
        provider = SessionProvider(fake)
        self.assertIs(provider.get_session(), fake)
        await provider.close_session()
        self.assertFalse(fake.closed)


if __name__ == '__main__':
    unittest.main()
