from __future__ import annotations

from django.test import SimpleTestCase
from django.utils import translation

from apps.assets.i18n import is_rtl, load_script_textdomain, print_translations
from apps.assets.service import Assets

from .utils import BuildOutputMixin


class GetTranslationsTests(BuildOutputMixin, SimpleTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.assets = Assets()

    def test_handle_first_then_chunks_in_recorded_order(self) -> None:
        self.write_manifest("editor", chunks={"chunks": ["c1", "c2"]})
        self.write_translations("editor", "fr", {"id": "editor"})
        self.write_translations("c1", "fr", {"id": "c1"})
        self.write_translations("c2", "fr", {"id": "c2"})

        with translation.override("fr"):
            self.assets.register_script_asset("editor")
            result = self.assets.get_translations("editor")

        self.assertEqual(result, [{"id": "editor"}, {"id": "c1"}, {"id": "c2"}])

    def test_empty_payloads_are_omitted_order_preserved(self) -> None:
        self.write_manifest("editor", chunks={"chunks": ["c1", "c2"]})
        self.write_translations("c1", "fr", "")
        self.write_translations("c2", "fr", {"id": "c2"})

        with translation.override("fr"):
            self.assets.register_script_asset("editor")
            result = self.assets.get_translations("editor")

        self.assertEqual(result, [{"id": "c2"}])

    def test_no_recorded_chunks_gives_empty_result(self) -> None:
        self.write_translations("editor", "fr", {"id": "editor"})

        with translation.override("fr"):
            self.assertEqual(self.assets.get_translations("editor"), [])
            # Registered without going through the asset registrar: still no chunk list.
            self.assets.register_script("editor", "/static/assets/js/editor.js")
            self.assertEqual(self.assets.get_translations("editor"), [])

    def test_malformed_payload_is_skipped(self) -> None:
        self.write_manifest("editor", chunks={"chunks": ["c1"]})
        self.write_translations("editor", "fr", "{broken")
        self.write_translations("c1", "fr", {"id": "c1"})

        with translation.override("fr"):
            self.assets.register_script_asset("editor")
            with self.assertLogs("assets.service", level="WARNING"):
                result = self.assets.get_translations("editor")

        self.assertEqual(result, [{"id": "c1"}])

    def test_undecodable_bytes_do_not_abort_registration(self) -> None:
        self.write_manifest("editor", chunks={"chunks": ["c1", "c2"]})
        (self.languages_dir / "stories-fr-c1.json").write_bytes(b'{"a": "\xff\xfe"}')
        self.write_translations("c2", "fr", {"id": "c2"})

        with translation.override("fr"):
            with self.assertLogs("assets.i18n", level="WARNING"):
                self.assets.register_script_asset("editor")
            result = self.assets.get_translations("editor")

        self.assertIn("c2", self.assets.registry.scripts.registered)
        self.assertEqual(result, [{"id": "c2"}])
        self.assertEqual(len(self.assets.registry.scripts.get_data("editor", "after")), 1)


class TranslationLookupTests(BuildOutputMixin, SimpleTestCase):
    def test_regional_locale_falls_back_to_language(self) -> None:
        self.write_translations("editor", "fr", {"lang": "fr"})

        with translation.override("fr-ca"):
            raw = load_script_textdomain("editor", "stories")

        self.assertEqual(raw, '{"lang": "fr"}')

    def test_regional_file_preferred(self) -> None:
        self.write_translations("editor", "fr", {"lang": "fr"})
        self.write_translations("editor", "fr_CA", {"lang": "fr_CA"})

        raw = load_script_textdomain("editor", "stories", locale="fr-ca")

        self.assertEqual(raw, '{"lang": "fr_CA"}')

    def test_missing_payload_is_none(self) -> None:
        self.assertIsNone(load_script_textdomain("editor", "stories", locale="de"))
        self.assertEqual(print_translations("editor", "stories", locale="de"), "")

    def test_print_translations_refuses_malformed_payload(self) -> None:
        self.write_translations("editor", "fr", "{broken")

        with self.assertLogs("assets.i18n", level="WARNING"):
            js = print_translations("editor", "stories", locale="fr")

        self.assertEqual(js, "")

    def test_print_translations_wraps_payload(self) -> None:
        self.write_translations("editor", "fr", {"locale_data": {"stories": {"": {}}}})

        js = print_translations("editor", "stories", locale="fr")

        self.assertIn('( "stories", {"locale_data"', js)
        self.assertIn("window.storiesI18n.setLocaleData( localeData, domain );", js)

    def test_is_rtl_follows_active_language(self) -> None:
        with translation.override("ar"):
            self.assertTrue(is_rtl())
        with translation.override("fr"):
            self.assertFalse(is_rtl())
