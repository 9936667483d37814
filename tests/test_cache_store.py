import asyncio

from api_headline_svg.cache_store import (
    CACHE_TTL_SECONDS,
    MemoryCacheStore,
    RedisCacheStore,
    build_cache_store,
    cache_key,
)


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class FakeRedis:
    def __init__(self):
        self.data = {}
        self.set_calls = []
        self.closed = False

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value, ex=None):
        self.set_calls.append((key, value, ex))
        self.data[key] = value

    async def ping(self):
        return True

    async def aclose(self):
        self.closed = True


def test_ttl_is_thirty_days():
    assert CACHE_TTL_SECONDS == 2_592_000


def test_cache_key_uses_raw_headline():
    assert cache_key("Hello World") == "svg_Hello World"
    assert cache_key(" Hello World") != cache_key("Hello World")
    assert cache_key("hello world") != cache_key("Hello World")
    assert cache_key("Hi", prefix="test_") == "test_Hi"


def test_memory_store_round_trip_and_expiry():
    clock = FakeClock()
    store = MemoryCacheStore(clock=clock)

    asyncio.run(store.put("svg_a", "<html/>", 60))
    assert asyncio.run(store.get("svg_a")) == "<html/>"

    clock.now += 59
    assert asyncio.run(store.get("svg_a")) == "<html/>"

    clock.now += 1
    assert asyncio.run(store.get("svg_a")) is None
    assert len(store) == 0


def test_memory_store_miss():
    assert asyncio.run(MemoryCacheStore().get("svg_missing")) is None


def test_redis_store_sets_expiry():
    client = FakeRedis()
    store = RedisCacheStore(client)

    asyncio.run(store.put("svg_a", "<html/>", CACHE_TTL_SECONDS))

    assert client.set_calls == [("svg_a", "<html/>", CACHE_TTL_SECONDS)]
    assert asyncio.run(store.get("svg_a")) == "<html/>"
    assert asyncio.run(store.ping()) is True


def test_build_cache_store_picks_backend():
    assert isinstance(build_cache_store(None), MemoryCacheStore)
    assert isinstance(build_cache_store("redis://localhost:6379/0"), RedisCacheStore)


def test_memory_store_drops_expired_entries_on_write():
    clock = FakeClock()
    store = MemoryCacheStore(clock=clock)

    for i in range(1000):
        asyncio.run(store.put(f"svg_{i}", "<html/>", 60))
    assert len(store) == 1000

    clock.now += 3600
    asyncio.run(store.put("svg_fresh", "<html/>", 60))

    assert len(store) == 1
    assert asyncio.run(store.get("svg_fresh")) == "<html/>"


def test_memory_store_keeps_live_entries_on_write():
    clock = FakeClock()
    store = MemoryCacheStore(clock=clock)

    asyncio.run(store.put("svg_short", "a", 10))
    asyncio.run(store.put("svg_long", "b", 100))
    clock.now += 50
    asyncio.run(store.put("svg_new", "c", 10))

    assert len(store) == 2
    assert asyncio.run(store.get("svg_long")) == "b"


def test_redis_store_close_releases_client():
    client = FakeRedis()
    asyncio.run(RedisCacheStore(client).close())
    assert client.closed is True
