"""Tests for markup and link normalization helpers."""

from animethemes_scraper.utils.normalization import (
    normalize_content_html,
    path_segment,
    unescape_quotes,
)


class TestNormalizeContentHtml:
    def test_unescapes_angle_brackets(self):
        assert normalize_content_html("&lt;h3&gt;Title&lt;/h3&gt;") == "<h3>Title</h3>"

    def test_leaves_other_entities_alone(self):
        raw = "&lt;td&gt;OP1 &quot;x&quot; &amp; more&lt;/td&gt;"
        assert normalize_content_html(raw) == "<td>OP1 &quot;x&quot; &amp; more</td>"


class TestUnescapeQuotes:
    def test_replaces_every_quote_entity(self):
        assert unescape_quotes("OP1 &quot;sister's noise&quot;") == 'OP1 "sister\'s noise"'

    def test_plain_text_unchanged(self):
        assert unescape_quotes("ED2 plain") == "ED2 plain"


class TestPathSegment:
    def test_mal_id_segment(self):
        assert path_segment("https://myanimelist.net/anime/6547/", 4) == "6547"

    def test_year_segment(self):
        assert path_segment("/r/AnimeThemes/wiki/2005", 4) == "2005"

    def test_short_link_gives_empty(self):
        assert path_segment("/wiki", 4) == ""

    def test_missing_link_gives_empty(self):
        assert path_segment(None, 4) == ""
        assert path_segment("", 4) == ""
