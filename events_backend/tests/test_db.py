import unittest
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from bson import ObjectId

from events_backend.db import InMemoryEventStore, MongoEventStore

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


class InMemoryEventStoreTests(unittest.IsolatedAsyncioTestCase):
    async def test_create_adds_id_and_timestamps(self):
        store = InMemoryEventStore(clock=lambda: NOW)
        event = await store.create_event({"title": "Launch", "tags": ["a"]})

        self.assertTrue(ObjectId.is_valid(event["_id"]))
        self.assertEqual(event["title"], "Launch")
        self.assertEqual(event["tags"], ["a"])
        self.assertEqual(event["createdAt"], NOW.isoformat())
        self.assertEqual(event["updatedAt"], NOW.isoformat())

    async def test_list_orders_newest_first(self):
        ticks = iter([NOW, NOW + timedelta(hours=2), NOW + timedelta(hours=1)])
        store = InMemoryEventStore(clock=lambda: next(ticks))
        for title in ("a", "b", "c"):
            await store.create_event({"title": title})

        events = await store.list_events()
        self.assertEqual([e["title"] for e in events], ["b", "c", "a"])

    async def test_reset(self):
        store = InMemoryEventStore()
        await store.create_event({"title": "x"})
        store.reset()
        self.assertEqual(await store.list_events(), [])


class MongoEventStoreTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.client = MagicMock()
        self.collection = self.client.__getitem__.return_value.__getitem__.return_value
        self.cache = MagicMock()
        self.cache.acquire = AsyncMock(return_value=self.client)
        self.store = MongoEventStore(
            self.cache, uri="mongodb://db", db_name="devevent", clock=lambda: NOW
        )

    async def test_connect_acquires_cached_client(self):
        await self.store.connect()
        self.cache.acquire.assert_awaited_once_with("mongodb://db")

    async def test_create_event_inserts_document(self):
        inserted_id = ObjectId()
        self.collection.insert_one = AsyncMock(
            return_value=SimpleNamespace(inserted_id=inserted_id)
        )

        event = await self.store.create_event({"title": "Launch"})

        self.client.__getitem__.assert_called_with("devevent")
        self.client.__getitem__.return_value.__getitem__.assert_called_with("events")
        stored = self.collection.insert_one.await_args.args[0]
        self.assertEqual(stored["title"], "Launch")
        self.assertEqual(stored["createdAt"], NOW)
        self.assertEqual(event["_id"], str(inserted_id))
        self.assertEqual(event["createdAt"], NOW.isoformat())

    async def test_list_events_sorts_by_created_at(self):
        docs = [
            {"_id": ObjectId(), "title": "new", "createdAt": NOW},
            {"_id": ObjectId(), "title": "old", "createdAt": NOW - timedelta(days=1)},
        ]
        cursor = MagicMock()
        cursor.to_list = AsyncMock(return_value=docs)
        self.collection.find.return_value.sort.return_value = cursor

        events = await self.store.list_events()

        self.collection.find.return_value.sort.assert_called_once_with("createdAt", -1)
        self.assertEqual([e["title"] for e in events], ["new", "old"])
        self.assertEqual(events[0]["_id"], str(docs[0]["_id"]))


if __name__ == "__main__":
    unittest.main()
