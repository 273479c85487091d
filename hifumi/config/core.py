import logging
import os
from typing import List

logger = logging.getLogger(__name__)

# Channels where diagnostics stay local instead of going to the log channel
DEFAULT_DEV_CHANNEL_IDS = [655484859405303809, 551588329003548683, 922679249058553857]
DEFAULT_LOG_CHANNEL_ID = 655484804405657642


def _split_ids(raw: str) -> List[int]:
    return [int(cid.strip()) for cid in raw.split(",") if cid.strip()]


def _as_bool(raw: object) -> bool:
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in ("1", "true", "yes")


class Core:
    def __init__(self, section: dict | None = None) -> None:
        cfg = section or {}
        discord_cfg = cfg.get("discord", {})
        prefix_cfg = cfg.get("prefixes", {})
        status_cfg = cfg.get("status", {})
        storage_cfg = cfg.get("storage", {})

        token_env = str(discord_cfg.get("token_env", "BOT_TOKEN"))
        self.DISCORD_API_TOKEN: str | None = os.getenv(token_env)

        # Environment beats config.toml
        self.DEV_MODE: bool = _as_bool(os.getenv("DEV_MODE") or cfg.get("dev_mode", False))

        self.DEFAULT_PREFIX: str = str(prefix_cfg.get("default", "h!"))
        self.DEV_PREFIX: str = str(prefix_cfg.get("dev", "h?"))

        dev_channels_cfg = discord_cfg.get("dev_channel_ids")
        if dev_channels_cfg:
            self.DEV_CHANNEL_IDS: List[int] = [int(cid) for cid in dev_channels_cfg]
        elif os.getenv("DEV_CHANNEL_IDS"):
            self.DEV_CHANNEL_IDS = _split_ids(os.getenv("DEV_CHANNEL_IDS", ""))
        else:
            self.DEV_CHANNEL_IDS = list(DEFAULT_DEV_CHANNEL_IDS)

        self.LOG_CHANNEL_ID: int = int(
            discord_cfg.get("log_channel_id") or os.getenv("LOG_CHANNEL_ID", str(DEFAULT_LOG_CHANNEL_ID))
        )

        self.EMBED_COLOUR: int = int(cfg.get("embed_colour", 0xCE3A9B))

        # Presence rotation window in seconds, both ends inclusive
        self.STATUS_INTERVAL_MIN: int = int(status_cfg.get("interval_min", os.getenv("STATUS_INTERVAL_MIN", "300")))
        self.STATUS_INTERVAL_MAX: int = int(status_cfg.get("interval_max", os.getenv("STATUS_INTERVAL_MAX", "900")))

        self.DB_NAME: str = str(storage_cfg.get("db_name", os.getenv("DB_NAME", "hifumi.db")))

        required = [
            ("DISCORD_API_TOKEN", self.DISCORD_API_TOKEN),
            ("DEFAULT_PREFIX", self.DEFAULT_PREFIX),
            ("DEV_PREFIX", self.DEV_PREFIX),
            ("LOG_CHANNEL_ID", self.LOG_CHANNEL_ID),
        ]
        missing = [name for name, val in required if not val]
        if missing:
            raise ValueError(f"Missing environment variables: {', '.join(missing)}")

        if self.STATUS_INTERVAL_MIN > self.STATUS_INTERVAL_MAX:
            raise ValueError(
                "STATUS_INTERVAL_MIN must not exceed STATUS_INTERVAL_MAX "
                f"({self.STATUS_INTERVAL_MIN} > {self.STATUS_INTERVAL_MAX})"
            )

        if self.DEV_MODE:
            logger.info("Development mode enabled; prefix forced to %s", self.DEV_PREFIX)
