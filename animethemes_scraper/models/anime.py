"""Pydantic models for scraped anime theme data."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


ThemeType = Literal["opening", "ending"]


def theme_type(name: str) -> ThemeType:
    """Classify a theme by its name prefix (OP1, OP2... are openings)."""
    return "opening" if name.startswith("OP") else "ending"


class ThemeModel(BaseModel):
    """One opening or ending song row from a series table."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description='Song type, number and title, e.g. OP1 "sister\'s noise"')
    link: Optional[str] = Field(default=None, description="Direct link to the hosted video file")
    type: ThemeType = Field(..., description="Song type")
    episodes: str = Field(default="", description="Episodes using this theme")
    notes: str = Field(default="", description="Additional notes (NSFW, spoilers)")

    @classmethod
    def from_row(
        cls,
        name: str,
        link: Optional[str],
        episodes: str = "",
        notes: str = "",
    ) -> "ThemeModel":
        """Create a ThemeModel from table cell values, deriving its type."""
        return cls(
            name=name,
            link=link,
            type=theme_type(name),
            episodes=episodes,
            notes=notes,
        )


class AnimeModel(BaseModel):
    """One series with its themes, as listed on a year page."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default="", description="MyAnimeList ID")
    title: str = Field(default="", description="Anime title, usually in romaji")
    year: str = Field(default="", description="Release year, or decade label for 1999 and older (e.g. 90s)")
    themes: List[ThemeModel] = Field(default_factory=list, description="Themes in table order")

    def with_year(self, year: str) -> "AnimeModel":
        """Return a copy stamped with the year page it was listed on."""
        return self.model_copy(update={"year": str(year)})
