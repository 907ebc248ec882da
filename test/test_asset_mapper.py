import asyncio
import copy
import datetime
import unittest

from enka_assets.assets import AssetMapper, PROFILE_PICTURE_HOST
from enka_assets.assets.data_fetcher import DATA_URLS, DatasetKind, ReferenceDataStore
from enka_assets.assets.url_builder import UrlBuilder
from enka_assets.enka_tracker.http_session import SessionProvider
from enka_assets.lib.errors import EnkaDataFetchError, EnkaMappingError
from fakes import FakeClock, FakeSession, PLAYER_RESPONSE, reference_routes

BASE = "https://enka.network/ui"


class TestAssetMapper(unittest.IsolatedAsyncioTestCase):

    async def asyncSetUp(self):
        self.session = FakeSession(reference_routes())
        store = ReferenceDataStore(SessionProvider(self.session), clock=FakeClock())
        self.mapper = AssetMapper(store, UrlBuilder(BASE))
        self.response = copy.deepcopy(PLAYER_RESPONSE)

    async def test_map_player_assets(self):
        before = datetime.datetime.now(datetime.UTC)
        assets = await self.mapper.map_player_assets(self.response)

        self.assertEqual(assets["profile_picture"], {
            "id": 100000,
            "icon_name": "/ui/UI_AvatarIcon_Ayaka_Circle.png",
            "url": f"{PROFILE_PICTURE_HOST}/ui/UI_AvatarIcon_Ayaka_Circle.png",
        })
        self.assertEqual(assets["name_card"], {
            "id": 210059,
            "icon_name": "UI_NameCardPic_Ayaka_P",
            "url": f"{BASE}/UI_NameCardPic_Ayaka_P.png",
        })
        self.assertEqual(assets["ttl"], 60)
        self.assertGreaterEqual(assets["last_updated"], before)

    async def test_show_avatars_keep_input_order(self):
        assets = await self.mapper.map_player_assets(self.response)
        xingqiu, ayaka = assets["show_avatars"]

        self.assertEqual(xingqiu, {
            "avatar_id": 10000025,
            "icon_name": "UI_AvatarIcon_Xingqiu",
            "url": f"{BASE}/UI_AvatarIcon_Xingqiu.png",
            "quality": 4,
            "level": 80,
            "talent_level": None,
            "element": "Water",
            "weapon_type": "WEAPON_SWORD_ONE_HAND",
        })
        self.assertEqual(ayaka["avatar_id"], 10000002)
        self.assertEqual(ayaka["quality"], 5)
        self.assertEqual(ayaka["talent_level"], 6)
        self.assertEqual(ayaka["element"], "Ice")

    async def test_player_info_is_whitelisted(self):
        assets = await self.mapper.map_player_assets(self.response)
        info = assets["player_info"]

        self.assertEqual(info["nickname"], "Paimon")
        self.assertEqual(info["world_level"], 9)
        self.assertEqual(info["finish_achievement_num"], 1021)
        self.assertEqual(info["stygian_seconds"], 410)
        self.assertTrue(info["is_show_avatar_talent"])
        self.assertNotIn("name_card_id", info)
        self.assertNotIn("showNameCardIdList", info)
        self.assertNotIn("avatarInfoList", assets)

    async def test_optional_player_fields_default_to_none(self):
        for key in ("signature", "stygianIndex", "theaterActIndex"):
            del self.response["playerInfo"][key]
        info = (await self.mapper.map_player_assets(self.response))["player_info"]
        self.assertIsNone(info["signature"])
        self.assertIsNone(info["stygian_index"])
        self.assertIsNone(info["theater_act_index"])

    async def test_unknown_character_fails_whole_resolution(self):
        self.response["playerInfo"]["showAvatarInfoList"].append({"avatarId": 99999999, "level": 1})
        with self.assertRaises(EnkaMappingError) as cm:
            await self.mapper.map_player_assets(self.response)
        self.assertEqual(cm.exception.missing_id, 99999999)
        self.assertIs(cm.exception.dataset, DatasetKind.CHARACTERS)

    async def test_unknown_profile_picture(self):
        self.response["playerInfo"]["profilePicture"] = {"id": 424242}
        with self.assertRaises(EnkaMappingError) as cm:
            await self.mapper.map_player_assets(self.response)
        self.assertEqual(cm.exception.missing_id, 424242)
        self.assertIs(cm.exception.dataset, DatasetKind.PROFILE_PICTURES)

    async def test_unknown_name_card(self):
        self.response["playerInfo"]["nameCardId"] = 1
        with self.assertRaises(EnkaMappingError) as cm:
            await self.mapper.map_player_assets(self.response)
        self.assertIs(cm.exception.dataset, DatasetKind.NAME_CARDS)

    async def test_unknown_quality_label_is_flagged(self):
        self.response["playerInfo"]["showAvatarInfoList"] = [{"avatarId": 10000062, "level": 90}]
        with self.assertRaises(EnkaMappingError) as cm:
            await self.mapper.map_player_assets(self.response)
        self.assertEqual(cm.exception.missing_id, "QUALITY_ORANGE_SP")

    async def test_empty_showcase(self):
        del self.response["playerInfo"]["showAvatarInfoList"]
        assets = await self.mapper.map_player_assets(self.response)
        self.assertEqual(assets["show_avatars"], [])

    async def test_characters_dataset_fetched_once_for_many_avatars(self):
        await self.mapper.map_player_assets(self.response)
        self.assertEqual(self.session.calls_to(DATA_URLS[DatasetKind.CHARACTERS]), 1)

    async def test_failing_characters_host_is_hit_once(self):
        characters_url = DATA_URLS[DatasetKind.CHARACTERS]
        self.session.routes[characters_url] = (503, {})
        self.response["playerInfo"]["showAvatarInfoList"] = [
            {"avatarId": 10000002, "level": 90} for _ in range(8)
        ]

        with self.assertRaises(EnkaDataFetchError):
            await self.mapper.map_player_assets(self.response)
        await asyncio.sleep(0)
        self.assertEqual(self.session.calls_to(characters_url), 1)

    async def test_returned_rows_do_not_alter_datasets(self):
        row = await self.mapper.get_character_data(10000002)
        row["Element"] = "Fire"
        self.assertEqual((await self.mapper.get_character_data(10000002))["Element"], "Ice")

    async def test_lookup_helpers(self):
        self.assertTrue(await self.mapper.has_character(10000002))
        self.assertTrue(await self.mapper.has_character("10000025"))
        self.assertFalse(await self.mapper.has_character(1))
        self.assertTrue(await self.mapper.has_profile_picture(1))
        self.assertFalse(await self.mapper.has_name_card(5))
        self.assertEqual((await self.mapper.get_character_data(10000002))["Element"], "Ice")
        self.assertIsNone(await self.mapper.get_profile_picture_data(7))
        self.assertEqual((await self.mapper.get_name_card_data(210001))["Icon"], "UI_NameCardPic_0_P")

    async def test_data_stats_and_cache(self):
        stats = await self.mapper.get_data_stats()
        self.assertEqual(stats, {"characters": 3, "profile_pictures": 2, "name_cards": 2})
        self.assertTrue(self.mapper.get_data_cache_info()["characters"]["cached"])
        self.mapper.clear_data_cache()
        self.assertFalse(self.mapper.get_data_cache_info()["characters"]["cached"])


if __name__ == '__main__':
    unittest.main()
