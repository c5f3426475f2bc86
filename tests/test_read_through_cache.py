import asyncio
import unittest

from fleetdash.read_through_cache import ReadThroughCache
from fleetdash.request_deduplicator import RequestDeduplicator
from fleetdash.ttl_cache import TtlCache


class ReadThroughCacheTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.now = 0.0
        self.cache = TtlCache(clock=lambda: self.now)
        self.reader = ReadThroughCache(self.cache, RequestDeduplicator())
        self.computed = 0

    async def _compute(self) -> dict[str, int]:
        self.computed += 1
        await asyncio.sleep(0)
        return {"value": self.computed}

    async def test_miss_computes_and_stores(self) -> None:
        value = await self.reader.get_or_compute("k", self._compute, ttl_s=30)

        self.assertEqual(value, {"value": 1})
        self.assertEqual(self.cache.get("k"), {"value": 1})

    async def test_hit_skips_computation(self) -> None:
        await self.reader.get_or_compute("k", self._compute, ttl_s=30)
        value = await self.reader.get_or_compute("k", self._compute, ttl_s=30)

        self.assertEqual(value, {"value": 1})
        self.assertEqual(self.computed, 1)

    async def test_expired_entry_is_recomputed(self) -> None:
        await self.reader.get_or_compute("k", self._compute, ttl_s=30)
        self.now = 31.0

        value = await self.reader.get_or_compute("k", self._compute, ttl_s=30)

        self.assertEqual(value, {"value": 2})

    async def test_concurrent_misses_compute_once(self) -> None:
        results = await asyncio.gather(
            *(self.reader.get_or_compute("k", self._compute, ttl_s=30) for _ in range(5))
        )

        self.assertEqual(self.computed, 1)
        self.assertEqual(results, [{"value": 1}] * 5)

    async def test_failure_is_not_cached(self) -> None:
        async def failing() -> None:
            raise ConnectionError("boom")

        with self.assertRaises(ConnectionError):
            await self.reader.get_or_compute("k", failing, ttl_s=30)

        self.assertIsNone(self.cache.get("k"))
        value = await self.reader.get_or_compute("k", self._compute, ttl_s=30)
        self.assertEqual(value, {"value": 1})

    async def test_invalidate_all_forces_recompute(self) -> None:
        await self.reader.get_or_compute("a", self._compute, ttl_s=30)
        await self.reader.get_or_compute("b", self._compute, ttl_s=30)

        self.reader.invalidate_all()

        self.assertIsNone(self.cache.get("a"))
        self.assertIsNone(self.cache.get("b"))
        await self.reader.get_or_compute("a", self._compute, ttl_s=30)
        self.assertEqual(self.computed, 3)


if __name__ == "__main__":
    unittest.main()
