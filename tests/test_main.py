import os
import unittest
from unittest import mock

from abroad_tracker import main
from abroad_tracker.application.pages import Page


class ConfigureLoggingTests(unittest.TestCase):
    def test_defaults_to_info(self):
        with mock.patch.dict(os.environ, {}, clear=True), mock.patch.object(main.logging, "basicConfig") as basic:
            main.configure_logging()
        self.assertEqual(basic.call_args.kwargs["level"], "INFO")

    def test_level_from_env(self):
        with mock.patch.dict(os.environ, {"LOG_LEVEL": "debug"}, clear=True), mock.patch.object(
            main.logging, "basicConfig"
        ) as basic:
            main.configure_logging()
        self.assertEqual(basic.call_args.kwargs["level"], "DEBUG")


class LoadAppConfigTests(unittest.TestCase):
    def test_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            config = main.load_app_config()
        self.assertEqual(config.db_path, "abroad_tracker.db")
        self.assertIsNone(config.catalog_path)
        self.assertEqual(config.activity_limit, 12)
        self.assertIsNone(config.metrics_log_path)


class RenderPageTests(unittest.TestCase):
    def test_notices_come_first(self):
        page = Page("Documents\n  0. [x] Visa", notices=["Completed document: Visa"])
        self.assertEqual(main.render_page(page), "* Completed document: Visa\nDocuments\n  0. [x] Visa")
