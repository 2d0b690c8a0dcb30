import unittest
from datetime import datetime, timezone

from abroad_tracker.application.presenters import TextPresenter
from abroad_tracker.application.queries import DocumentsOverview, DormResult, DormSearch
from abroad_tracker.domain import (
    CatalogEntry,
    DocumentItem,
    DormFavorite,
    UniversityRecord,
    UniversityType,
    UserProfile,
    document_progress,
    export_digest,
    kpi_summary,
)
from abroad_tracker.domain.models import ActivityEntry

PROFILE = UserProfile(name="John Doe", email="john.doe@example.com", country="Turkey")
AT = datetime(2026, 1, 5, 8, 15, tzinfo=timezone.utc)


class TextPresenterTests(unittest.TestCase):
    def setUp(self):
        self.presenter = TextPresenter()

    def test_summary_page_lists_kpis_and_activity(self):
        kpis = kpi_summary([], [], [DocumentItem("Passport (valid)", True), DocumentItem("Visa")])
        page = self.presenter.summary_page(PROFILE, kpis, [ActivityEntry(text="Updated checklist", at=AT)])
        self.assertEqual(page.title, "Dashboard")
        self.assertIn("Saved universities: 0", page.text)
        self.assertIn("Documents: 1/2", page.text)
        self.assertIn("- Updated checklist (", page.text)

    def test_summary_page_without_activity(self):
        page = self.presenter.summary_page(PROFILE, kpi_summary([], [], []), [])
        self.assertIn("No activity yet", page.text)

    def test_universities_page(self):
        uni = UniversityRecord(id="u1", name="Bucerius Law School", city="Hamburg", field="Law", type=UniversityType.PRIVATE)
        page = self.presenter.universities_page([uni], query="law")
        self.assertIn('Universities matching "law":', page.text)
        self.assertIn("[u1] Bucerius Law School", page.text)
        self.assertIn("Hamburg • Law • Private", page.text)

    def test_dorm_results_empty_message(self):
        page = self.presenter.dorm_search_page(DormSearch(city="Munich", max_price=300, results=[]))
        self.assertIn("No results for Munich under €300.", page.text)

    def test_dorm_results_empty_lists_cities(self):
        search = DormSearch(city="Paris", max_price=500, results=[], cities=["Berlin", "Hamburg", "Munich"])
        lines = self.presenter.dorm_search_page(search).text.splitlines()
        self.assertIn("  No results for Paris under €500.", lines)
        self.assertIn("  Cities with listings: Berlin, Hamburg, Munich", lines)

    def test_dorm_results_mark_favorites(self):
        search = DormSearch(
            city="Berlin",
            max_price=450,
            results=[
                DormResult(CatalogEntry("b1", "Student Housing Mitte", "Berlin", 390), is_favorite=True),
                DormResult(CatalogEntry("b2", "Campus Residence", "Berlin", 450), is_favorite=False),
            ],
        )
        lines = self.presenter.dorm_search_page(search).text.splitlines()
        self.assertIn("  [b1] Student Housing Mitte ★", lines)
        self.assertIn("  [b2] Campus Residence", lines)
        self.assertIn("      Berlin • from €450/month", lines)

    def test_dorm_favorites_page(self):
        page = self.presenter.dorm_favorites_page([DormFavorite("h1", "Hamburg Hafen Dorm", "Hamburg", 480)])
        self.assertIn("Hamburg • €480/month", page.text)
        self.assertIn("No favorites yet.", self.presenter.dorm_favorites_page([]).text)

    def test_documents_page(self):
        docs = [DocumentItem("Passport (valid)", True), DocumentItem("Motivation Letter")]
        page = self.presenter.documents_page(DocumentsOverview(documents=docs, progress=document_progress(docs)))
        lines = page.text.splitlines()
        self.assertIn("  0. [x] Passport (valid)", lines)
        self.assertIn("  1. [ ] Motivation Letter", lines)
        self.assertEqual(lines[-1], "1/2 completed (50%)")

    def test_export_page_uses_dash_for_empty_previews(self):
        page = self.presenter.export_page(export_digest(PROFILE, [], [], []))
        self.assertEqual(
            page.text.splitlines(),
            [
                "John Doe • john.doe@example.com • Turkey",
                "",
                "Universities: 0 saved",
                "  —",
                "Dorm favorites: 0 saved",
                "  —",
                "Documents: 0/0 completed",
                "  —",
            ],
        )

    def test_notice_keeps_page(self):
        page = self.presenter.activity_page([])
        noted = self.presenter.notice("Removed TU Berlin", page)
        self.assertEqual(noted.text, page.text)
        self.assertEqual(noted.notices, ["Removed TU Berlin"])
