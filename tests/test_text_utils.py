import unittest

from resume_ats.text_utils import (
    capitalize_with_acronyms,
    clean_text,
    has_dashes,
    normalize_acronyms,
    strip_html_tags,
)


class AcronymTests(unittest.TestCase):
    def test_normalize_acronyms(self):
        self.assertEqual(
            normalize_acronyms("built apis with fastapi and aws"),
            "built APIs with FastAPI and AWS",
        )

    def test_whole_words_only(self):
        self.assertEqual(normalize_acronyms("postgresql not sqlite"), "PostgreSQL not sqlite")

    def test_capitalize_with_acronyms(self):
        self.assertEqual(capitalize_with_acronyms("sql"), "SQL")
        self.assertEqual(capitalize_with_acronyms("ci/cd pipelines"), "CI/CD pipelines")
        self.assertEqual(capitalize_with_acronyms("data modeling"), "Data modeling")
        self.assertEqual(capitalize_with_acronyms(""), "")


class CleanupTests(unittest.TestCase):
    def test_clean_text_replaces_dashes(self):
        self.assertEqual(clean_text("2019 — 2021 – remote"), "2019 - 2021 - remote")

    def test_has_dashes(self):
        self.assertTrue(has_dashes("a — b"))
        self.assertTrue(has_dashes("2019–2021"))
        self.assertFalse(has_dashes("2019-2021"))

    def test_strip_html_tags(self):
        self.assertEqual(strip_html_tags("<strong>Led</strong> a team"), "Led a team")
        self.assertEqual(strip_html_tags(None), "")


if __name__ == "__main__":
    unittest.main()
