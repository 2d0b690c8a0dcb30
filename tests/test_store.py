import json
import tempfile
import unittest
from pathlib import Path

from abroad_tracker.infrastructure import InMemoryKeyValueStore
from abroad_tracker.infrastructure.sqlite import SQLiteDatabase, SQLiteKeyValueStore


class SQLiteKeyValueStoreTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.db_path = Path(self.tmpdir.name) / "test.db"
        self.db = SQLiteDatabase(str(self.db_path))
        await self.db.init()
        self.store = SQLiteKeyValueStore(self.db)

    async def asyncTearDown(self):
        self.tmpdir.cleanup()

    async def test_missing_key_returns_fallback(self):
        self.assertIsNone(await self.store.get("dwg_unis"))
        self.assertEqual(await self.store.get("dwg_unis", []), [])
        self.assertFalse(await self.store.contains("dwg_unis"))

    async def test_set_get_round_trip(self):
        value = {"schema": 2, "data": [{"text": "Passport (valid)", "done": True}]}
        await self.store.set("dwg_docs", value)
        self.assertTrue(await self.store.contains("dwg_docs"))
        self.assertEqual(await self.store.get("dwg_docs"), value)

        await self.store.set("dwg_docs", {"schema": 2, "data": []})
        self.assertEqual(await self.store.get("dwg_docs"), {"schema": 2, "data": []})

    async def test_values_survive_new_store_instance(self):
        await self.store.set("dwg_user", {"name": "Ayse", "email": "a@example.com", "country": "Turkey"})

        reopened_db = SQLiteDatabase(str(self.db_path))
        await reopened_db.init()
        reopened = SQLiteKeyValueStore(reopened_db)

        self.assertEqual(
            await reopened.get("dwg_user"),
            {"name": "Ayse", "email": "a@example.com", "country": "Turkey"},
        )

    async def test_corrupted_value_falls_back(self):
        async with self.db.connect() as conn:
            await conn.execute(
                "INSERT INTO kv_store(key, value) VALUES(?, ?)",
                ("dwg_docs", "{not json"),
            )
            await conn.commit()

        with self.assertLogs("abroad_tracker.infrastructure.sqlite.store", level="WARNING"):
            self.assertEqual(await self.store.get("dwg_docs", "fallback"), "fallback")

    async def test_delete_and_delete_many(self):
        for key in ("a", "b", "c"):
            await self.store.set(key, key)

        await self.store.delete("a")
        await self.store.delete("missing")
        self.assertFalse(await self.store.contains("a"))

        await self.store.delete_many(["b", "c"])
        self.assertIsNone(await self.store.get("b"))
        self.assertIsNone(await self.store.get("c"))

    async def test_init_is_repeatable(self):
        await self.store.set("k", [1, 2, 3])
        await self.db.init()
        self.assertEqual(await self.store.get("k"), [1, 2, 3])

    async def test_contains_is_timed(self):
        with self.assertLogs("metrics.actions", level="INFO") as logs:
            await self.store.contains("dwg_docs")
        payload = json.loads(logs.records[-1].getMessage())
        self.assertEqual(payload["op"], "store:contains")
        self.assertEqual(payload["key"], "dwg_docs")


class InMemoryKeyValueStoreTests(unittest.IsolatedAsyncioTestCase):
    async def test_values_are_copied_through_json(self):
        store = InMemoryKeyValueStore()
        value = {"items": [1, 2]}
        await store.set("k", value)
        value["items"].append(3)

        loaded = await store.get("k")
        self.assertEqual(loaded, {"items": [1, 2]})
        self.assertIsNot(loaded, value)

    async def test_corrupted_raw_value_falls_back(self):
        store = InMemoryKeyValueStore({"dwg_unis": "[{"})
        with self.assertLogs("abroad_tracker.infrastructure.memory", level="WARNING"):
            self.assertEqual(await store.get("dwg_unis", []), [])
        self.assertTrue(await store.contains("dwg_unis"))
