"""Tests for the anime and theme models."""

import pytest
from pydantic import ValidationError

from animethemes_scraper.models.anime import AnimeModel, ThemeModel, theme_type


class TestThemeType:
    @pytest.mark.parametrize("name", ['OP1 "sister\'s noise"', "OP", "OP2 v2"])
    def test_op_prefix_is_opening(self, name):
        assert theme_type(name) == "opening"

    @pytest.mark.parametrize("name", ['ED1 "y"', "Insert song", "op1 lowercase", "", " OP1"])
    def test_anything_else_is_ending(self, name):
        assert theme_type(name) == "ending"


class TestThemeModel:
    def test_from_row_derives_type(self):
        theme = ThemeModel.from_row('ED1 "y"', "https://animethemes.moe/video/a.webm", "1-12", "NSFW")
        assert theme.type == "ending"
        assert theme.episodes == "1-12"
        assert theme.notes == "NSFW"

    def test_link_may_be_missing(self):
        theme = ThemeModel.from_row("OP1", None)
        assert theme.link is None
        assert theme.episodes == ""

    def test_rejects_unknown_type(self):
        with pytest.raises(ValidationError):
            ThemeModel(name="OP1", type="insert")

    def test_is_immutable(self):
        theme = ThemeModel.from_row("OP1", None)
        with pytest.raises(ValidationError):
            theme.name = "OP2"


class TestAnimeModel:
    def test_with_year_returns_stamped_copy(self):
        anime = AnimeModel(id="1", title="Title")
        stamped = anime.with_year(1990)
        assert stamped.year == "1990"
        assert anime.year == ""

    def test_dump_shape(self):
        anime = AnimeModel(id="1", title="T", year="90s", themes=[ThemeModel.from_row("OP1", "l")])
        assert anime.model_dump() == {
            "id": "1",
            "title": "T",
            "year": "90s",
            "themes": [{"name": "OP1", "link": "l", "type": "opening", "episodes": "", "notes": ""}],
        }
