import asyncio
import json
import sys

from dotenv import load_dotenv
load_dotenv(".env")

import enka_assets
from enka_assets import AssetConfig, EnkaAssetError, EnkaAssetWrapper
from enka_assets.logger import logger, setup_console_logging


async def main(uids: list[str]) -> int:
    setup_console_logging()
    config = AssetConfig.from_env()
    logger.info("Starting enka-assets version %s", enka_assets.__version__)
    async with EnkaAssetWrapper(config) as enka:
        for uid in uids:
            try:
                assets = await enka.get_player_assets(uid)
            except EnkaAssetError as e:
                logger.error("Could not resolve uid %s: %s", uid, e)
                return 1
            print(json.dumps(assets, indent=2, default=str, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("usage: python launcher.py <uid> [<uid> ...]", file=sys.stderr)
        sys.exit(2)
    sys.exit(asyncio.run(main(sys.argv[1:])))
