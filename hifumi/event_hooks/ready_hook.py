import datetime

import discord
from hifumi import presence
from hifumi.config import core
from hifumi.escalation import TIMESTAMP_FORMAT

import logging

logger = logging.getLogger(__name__)


async def handle(client: discord.Client, started_at: datetime.datetime | None = None):
    """Log startup details and kick off status rotation on client ready."""
    now = datetime.datetime.now(datetime.timezone.utc)
    if started_at is not None:
        elapsed_ms = int((now - started_at).total_seconds() * 1000)
        logger.info("Started up in %dms on %s", elapsed_ms, now.strftime(TIMESTAMP_FORMAT))

    logger.info(f"Logged in as {client.user.name} (ID: {client.user.id})")
    logger.info("Running in %s mode", "dev" if core.DEV_MODE else "production")

    presence.start(client)
