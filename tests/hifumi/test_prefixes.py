import asyncio
from types import SimpleNamespace

from hifumi import prefixes
from hifumi.datatypes import PrefixEntry
from hifumi.errors import ExternalServiceError
from hifumi.memory.state import BotState


class FakeChannel:
    def __init__(self, channel_id=10):
        self.id = channel_id
        self.sent = []

    async def send(self, content=None, **kwargs):
        self.sent.append(content)


def _message(guild_id=5, channel=None):
    guild = SimpleNamespace(id=guild_id, name="Guild") if guild_id is not None else None
    return SimpleNamespace(
        guild=guild,
        channel=channel or FakeChannel(),
        author=SimpleNamespace(id=1, bot=False, name="user"),
        content="hello",
    )


def _patch_store(monkeypatch, *, fail=False, delay=False):
    calls = []

    async def fake_insert(entry):
        calls.append(entry)
        if delay:
            await asyncio.sleep(0)
        if fail:
            raise ExternalServiceError("store offline")

    monkeypatch.setattr(prefixes.store, "insert_prefix", fake_insert)
    return calls


def test_first_contact_registers_default_prefix(monkeypatch):
    calls = _patch_store(monkeypatch)
    message = _message()

    resolution = asyncio.run(prefixes.resolve(message))

    assert resolution.prefix == "h!"
    assert resolution.registered and resolution.error is None
    assert calls == [PrefixEntry("5", "h!")]
    assert asyncio.run(BotState().get_prefix("5")) == "h!"
    assert message.channel.sent == [prefixes.first_contact_notice("h!")]


def test_known_guild_prefix_is_lower_cased_without_registration(monkeypatch):
    calls = _patch_store(monkeypatch)
    asyncio.run(BotState().set_prefix("5", "HI!"))
    message = _message()

    resolution = asyncio.run(prefixes.resolve(message))

    assert resolution == prefixes.PrefixResolution("hi!")
    assert calls == []
    assert message.channel.sent == []


def test_direct_messages_use_default_even_in_dev_mode(monkeypatch):
    calls = _patch_store(monkeypatch)
    monkeypatch.setattr(prefixes.core, "DEV_MODE", True)

    resolution = asyncio.run(prefixes.resolve(_message(guild_id=None)))

    assert resolution.prefix == "h!"
    assert calls == []


def test_dev_mode_overrides_guild_prefix(monkeypatch):
    calls = _patch_store(monkeypatch)
    monkeypatch.setattr(prefixes.core, "DEV_MODE", True)
    asyncio.run(BotState().set_prefix("5", "x!"))

    first = asyncio.run(prefixes.resolve(_message()))
    second = asyncio.run(prefixes.resolve(_message()))

    assert first.prefix == second.prefix == "h?"
    assert calls == []


def test_failed_registration_still_caches_default(monkeypatch):
    calls = _patch_store(monkeypatch, fail=True)
    message = _message()

    resolution = asyncio.run(prefixes.resolve(message))

    assert resolution.prefix == "h!"
    assert isinstance(resolution.error, ExternalServiceError)
    assert len(calls) == 1
    assert asyncio.run(BotState().get_prefix("5")) == "h!"
    # No announcement for a prefix that was not saved
    assert message.channel.sent == []


def test_concurrent_first_contacts_converge(monkeypatch):
    calls = _patch_store(monkeypatch, delay=True)

    async def run():
        return await asyncio.gather(
            prefixes.resolve(_message()), prefixes.resolve(_message())
        )

    results = asyncio.run(run())

    assert [r.prefix for r in results] == ["h!", "h!"]
    assert 1 <= len(calls) <= 2
    assert asyncio.run(BotState().get_prefix("5")) == "h!"
    assert asyncio.run(BotState().prefix_count()) == 1


def test_failed_notice_still_resolves_default(monkeypatch):
    calls = _patch_store(monkeypatch)

    class _DeadChannel(FakeChannel):
        async def send(self, content=None, **kwargs):
            raise ConnectionResetError(104, "Connection reset by peer")

    resolution = asyncio.run(prefixes.resolve(_message(channel=_DeadChannel())))

    assert resolution == prefixes.PrefixResolution("h!", registered=True, error=None)
    assert calls == [PrefixEntry("5", "h!")]
    assert asyncio.run(BotState().get_prefix("5")) == "h!"
