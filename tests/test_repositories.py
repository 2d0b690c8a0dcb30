import unittest
from datetime import datetime, timedelta, timezone

from abroad_tracker.domain import ChangeBus, DormFavorite, UniversityType, UserProfile
from abroad_tracker.domain.models import DEFAULT_PROFILE, DocumentItem
from abroad_tracker.infrastructure import InMemoryKeyValueStore, StoreKeys
from abroad_tracker.infrastructure.clock import FixedClock
from abroad_tracker.infrastructure.mappers import legacy_university_id, wrap
from abroad_tracker.infrastructure.repositories import (
    StoreActivityRepository,
    StoreDocumentsRepository,
    StoreDormFavoritesRepository,
    StoreProfileRepository,
    StoreUniversitiesRepository,
)

START = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


class SteppingClock:
    def __init__(self, start: datetime):
        self.current = start

    def now(self) -> datetime:
        self.current += timedelta(minutes=1)
        return self.current


class RepositoryTestCase(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.store = InMemoryKeyValueStore()
        self.bus = ChangeBus()
        self.published: list[str] = []

        async def record(key: str) -> None:
            self.published.append(key)

        self.bus.subscribe(StoreKeys.ALL, record)
        self.activity = StoreActivityRepository(self.store, clock=SteppingClock(START), bus=self.bus)
        self.universities = StoreUniversitiesRepository(self.store, self.activity, bus=self.bus)
        self.favorites = StoreDormFavoritesRepository(self.store, self.activity, bus=self.bus)
        self.documents = StoreDocumentsRepository(self.store, self.activity, bus=self.bus)
        self.profile = StoreProfileRepository(self.store, self.activity, bus=self.bus)

    async def activity_texts(self) -> list[str]:
        return [entry.text for entry in await self.activity.list()]


class ActivityRepositoryTests(RepositoryTestCase):
    async def test_append_keeps_twelve_newest_first(self):
        for i in range(20):
            await self.activity.append(f"event {i}")

        entries = await self.activity.list()
        self.assertEqual(len(entries), 12)
        self.assertEqual([e.text for e in entries], [f"event {i}" for i in range(19, 7, -1)])
        self.assertEqual(entries, sorted(entries, key=lambda e: e.at, reverse=True))

    async def test_append_stamps_clock_time(self):
        activity = StoreActivityRepository(self.store, clock=FixedClock(START))
        entry = await activity.append("Signed in as a@example.com")
        self.assertEqual(entry.at, START)
        stored = (await self.store.get(StoreKeys.ACTIVITY))["data"][0]
        self.assertEqual(stored, {"text": "Signed in as a@example.com", "at": START.isoformat()})

    async def test_custom_limit(self):
        activity = StoreActivityRepository(self.store, clock=FixedClock(START), limit=3)
        for i in range(5):
            await activity.append(str(i))
        self.assertEqual([e.text for e in await activity.list()], ["4", "3", "2"])

    async def test_rejects_non_positive_limit(self):
        with self.assertRaises(ValueError):
            StoreActivityRepository(self.store, limit=0)


class UniversitiesRepositoryTests(RepositoryTestCase):
    async def test_add_prepends_and_logs(self):
        first = await self.universities.add(name="TU Berlin", city="Berlin", field="CS", type="Public")
        second = await self.universities.add(
            name="Bucerius Law School", city="Hamburg", field="Law", type=UniversityType.PRIVATE
        )

        listed = await self.universities.list()
        self.assertEqual([u.id for u in listed], [second.id, first.id])
        self.assertNotEqual(first.id, second.id)
        self.assertEqual(listed[0].type, UniversityType.PRIVATE)
        self.assertEqual(
            await self.activity_texts(),
            ["Saved university: Bucerius Law School", "Saved university: TU Berlin"],
        )
        self.assertIn(StoreKeys.UNIVERSITIES, self.published)

    async def test_duplicates_are_allowed(self):
        await self.universities.add(name="LMU", city="Munich", field="Medicine")
        await self.universities.add(name="LMU", city="Munich", field="Medicine")
        listed = await self.universities.list()
        self.assertEqual(len(listed), 2)
        self.assertNotEqual(listed[0].id, listed[1].id)

    async def test_remove_by_id(self):
        keep = await self.universities.add(name="A", city="Berlin", field="X")
        drop = await self.universities.add(name="B", city="Berlin", field="Y")

        removed = await self.universities.remove(drop.id)

        self.assertEqual(removed, drop)
        self.assertEqual(await self.universities.list(), [keep])
        self.assertEqual((await self.activity_texts())[0], "Removed university: B")
        self.assertEqual(await self.universities.get(keep.id), keep)
        self.assertIsNone(await self.universities.get(drop.id))

    async def test_remove_unknown_id_is_noop(self):
        await self.universities.add(name="A", city="Berlin", field="X")
        snapshot = dict(self.store.raw)

        self.assertIsNone(await self.universities.remove("missing"))
        self.assertEqual(self.store.raw, snapshot)

    async def test_remove_at_stale_index_is_noop(self):
        await self.universities.add(name="A", city="Berlin", field="X")
        await self.universities.add(name="B", city="Berlin", field="Y")

        removed = await self.universities.remove_at(1)
        self.assertEqual(removed.name, "A")
        await self.universities.remove_at(0)
        snapshot = dict(self.store.raw)

        self.assertIsNone(await self.universities.remove_at(0))
        self.assertIsNone(await self.universities.remove_at(5))
        self.assertIsNone(await self.universities.remove_at(-1))
        self.assertEqual(self.store.raw, snapshot)
        self.assertEqual(await self.universities.list(), [])

    async def test_legacy_records_get_stable_ids(self):
        legacy = [
            {"name": "Technical University of Munich", "city": "Munich", "field": "Engineering", "type": "Public"},
            {"name": "Free University of Berlin", "city": "Berlin", "field": "Research", "type": "Public"},
        ]
        await self.store.set(StoreKeys.UNIVERSITIES, legacy)

        first_read = await self.universities.list()
        second_read = await self.universities.list()

        self.assertEqual([u.id for u in first_read], [u.id for u in second_read])
        self.assertEqual(first_read[1].id, legacy_university_id(1, legacy[1]))

        removed = await self.universities.remove(first_read[1].id)
        self.assertEqual(removed.name, "Free University of Berlin")
        stored = await self.store.get(StoreKeys.UNIVERSITIES)
        self.assertEqual(stored["schema"], 2)
        self.assertEqual(stored["data"][0]["id"], first_read[0].id)

    async def test_malformed_records_are_rejected(self):
        await self.store.set(
            StoreKeys.UNIVERSITIES,
            wrap(
                [
                    {"id": "ok", "name": "A", "city": "Berlin", "field": "X", "type": "Public"},
                    {"id": "bad-type", "name": "B", "city": "Berlin", "field": "Y", "type": "Online"},
                    {"id": "no-city", "name": "C", "field": "Z"},
                    "not a record",
                ]
            ),
        )
        with self.assertLogs("abroad_tracker.infrastructure.repositories.base", level="WARNING"):
            listed = await self.universities.list()
        self.assertEqual([u.id for u in listed], ["ok"])

    async def test_wrong_shape_falls_back_to_empty(self):
        await self.store.set(StoreKeys.UNIVERSITIES, {"schema": 2, "data": {"oops": True}})
        with self.assertLogs("abroad_tracker.infrastructure.repositories.base", level="WARNING"):
            self.assertEqual(await self.universities.list(), [])

    async def test_newer_schema_is_ignored(self):
        await self.store.set(StoreKeys.UNIVERSITIES, {"schema": 99, "data": []})
        with self.assertLogs("abroad_tracker.infrastructure.repositories.base", level="WARNING"):
            self.assertEqual(await self.universities.list(), [])


class DormFavoritesRepositoryTests(RepositoryTestCase):
    MITTE = DormFavorite(id="b1", name="Student Housing Mitte", city="Berlin", price=390)
    CAMPUS = DormFavorite(id="b2", name="Campus Residence", city="Berlin", price=450)

    async def test_toggle_adds_then_removes(self):
        self.assertTrue(await self.favorites.toggle(self.MITTE))
        self.assertTrue(await self.favorites.contains("b1"))
        self.assertFalse(await self.favorites.toggle(self.MITTE))
        self.assertFalse(await self.favorites.contains("b1"))
        self.assertEqual(
            await self.activity_texts(),
            ["Removed dorm favorite: Student Housing Mitte", "Saved dorm favorite: Student Housing Mitte"],
        )

    async def test_toggle_twice_restores_members(self):
        await self.favorites.toggle(self.CAMPUS)
        before = await self.favorites.list()

        await self.favorites.toggle(self.MITTE)
        await self.favorites.toggle(self.MITTE)

        self.assertEqual(set(await self.favorites.list()), set(before))

    async def test_toggle_matches_on_id_not_position(self):
        await self.favorites.toggle(self.MITTE)
        await self.favorites.toggle(self.CAMPUS)
        stale_copy = DormFavorite(id="b1", name="Student Housing Mitte", city="Berlin", price=999)

        self.assertFalse(await self.favorites.toggle(stale_copy))
        self.assertEqual(await self.favorites.list(), [self.CAMPUS])

    async def test_newest_first_and_unique(self):
        await self.favorites.toggle(self.MITTE)
        await self.favorites.toggle(self.CAMPUS)
        listed = await self.favorites.list()
        self.assertEqual([f.id for f in listed], ["b2", "b1"])
        self.assertEqual(len({f.id for f in listed}), len(listed))

    async def test_remove_unknown_id_is_noop(self):
        await self.favorites.toggle(self.MITTE)
        texts_before = await self.activity_texts()

        self.assertIsNone(await self.favorites.remove("zz"))
        self.assertEqual(await self.activity_texts(), texts_before)

        removed = await self.favorites.remove("b1")
        self.assertEqual(removed, self.MITTE)
        self.assertEqual((await self.activity_texts())[0], "Removed dorm favorite: Student Housing Mitte")


class DocumentsRepositoryTests(RepositoryTestCase):
    async def asyncSetUp(self):
        await self.store.set(
            StoreKeys.DOCUMENTS,
            wrap([{"text": "Passport (valid)", "done": False}, {"text": "Motivation Letter", "done": False}]),
        )

    async def test_set_done_updates_one_item(self):
        updated = await self.documents.set_done(1, True)

        self.assertEqual(updated, DocumentItem(text="Motivation Letter", done=True))
        self.assertEqual(
            await self.documents.list(),
            [DocumentItem("Passport (valid)", False), DocumentItem("Motivation Letter", True)],
        )
        self.assertEqual(await self.activity_texts(), ["Completed document: Motivation Letter"])

        await self.documents.set_done(1, False)
        self.assertEqual((await self.activity_texts())[0], "Unchecked document: Motivation Letter")

    async def test_set_done_invalid_index_is_noop(self):
        snapshot = dict(self.store.raw)
        self.assertIsNone(await self.documents.set_done(2, True))
        self.assertIsNone(await self.documents.set_done(-1, True))
        self.assertEqual(self.store.raw, snapshot)

    async def test_mark_all_and_clear_all(self):
        await self.documents.mark_all(True)
        self.assertTrue(all(doc.done for doc in await self.documents.list()))
        await self.documents.mark_all(False)
        self.assertFalse(any(doc.done for doc in await self.documents.list()))
        self.assertEqual(
            await self.activity_texts(),
            ["Cleared all document checks", "Marked all documents as completed"],
        )
        self.assertEqual(len(await self.documents.list()), 2)


class ProfileRepositoryTests(RepositoryTestCase):
    async def test_default_profile_when_unset(self):
        self.assertEqual(await self.profile.get(), DEFAULT_PROFILE)

    async def test_round_trip(self):
        profile = UserProfile(name="Ayşe Yılmaz", email="ayse@example.com", country="Türkiye")
        await self.profile.set(profile)
        self.assertEqual(await self.profile.get(), profile)
        self.assertEqual(await self.activity_texts(), ["Signed in as ayse@example.com"])
        self.assertIn(StoreKeys.USER, self.published)

    async def test_legacy_profile_is_read(self):
        await self.store.set(StoreKeys.USER, {"name": "John Doe", "email": "j@example.com", "country": "Turkey"})
        self.assertEqual((await self.profile.get()).email, "j@example.com")

    async def test_malformed_profile_falls_back(self):
        await self.store.set(StoreKeys.USER, wrap({"name": "x"}))
        with self.assertLogs("abroad_tracker.infrastructure.repositories.profile", level="WARNING"):
            self.assertEqual(await self.profile.get(), DEFAULT_PROFILE)
