"""Slug and excerpt helpers."""

import pytest

from utils import make_excerpt, slugify


class TestSlugify:
    @pytest.mark.parametrize("title,slug", [
        ("Merhaba Dünya", "merhaba-dunya"),
        ("Işık ve İstanbul", "isik-ve-istanbul"),
        ("Çiçekler Şöyle Güzel", "cicekler-soyle-guzel"),
        ("Yapay Zekâ", "yapay-zeka"),
        ("Café Résumé", "cafe-resume"),
        ("Niño  --  Año", "nino-ano"),
        ("  Python 3.12: Yenilikler!  ", "python-312-yenilikler"),
    ])
    def test_transliteration(self, title, slug):
        assert slugify(title) == slug

    def test_accents_do_not_collide_with_stripped_title(self):
        assert slugify("Café Résumé") != slugify("Caf Rsum")

    def test_only_symbols(self):
        assert slugify("!!! ???") == ""


class TestMakeExcerpt:
    def test_short_content_untouched(self):
        assert make_excerpt("<p>Kısa</p>", 150) == "Kısa"

    def test_long_content_truncated(self):
        assert make_excerpt("a" * 10, 4) == "aaaa..."
