"""Theme scraper for the r/AnimeThemes wiki."""

import asyncio
import json
import sys
from pathlib import Path
from typing import Callable, Optional

import aiohttp
from bs4 import BeautifulSoup, Tag

from ..constants.config import (
    ANIME_ID_SEGMENT,
    MAX_TABLE_PROBE,
    REDDIT_BASE_URL,
    USER_AGENT,
    WIKI_PATH,
    YEAR_INDEX_PAGE,
    YEAR_SEGMENT,
)
from ..constants.paths import OUTPUT_JSON_PATH
from ..models.anime import AnimeModel, ThemeModel
from ..utils.normalization import normalize_content_html, path_segment, unescape_quotes


# lxml applies HTML's implied end tags (<p> before <table>, bare <td>/<tr>)
HTML_PARSER = "lxml"


class WikiFetchError(Exception):
    """A wiki page could not be fetched."""

    def __init__(self, url: str, status: Optional[int] = None, message: str = ""):
        self.url = url
        self.status = status
        super().__init__(message or f"Failed to fetch {url}: {status}")


class WikiFormatError(WikiFetchError):
    """A wiki page was fetched but has no content HTML."""


def wiki_page_url(page: str | int, base_url: str = REDDIT_BASE_URL) -> str:
    """Build the JSON API URL of a wiki page."""
    return f"{base_url}{WIKI_PATH}/{page}.json"


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, HTML_PARSER)


def find_table(candidate: Optional[Tag], max_probe: int = MAX_TABLE_PROBE) -> Optional[Tag]:
    """
    Find the theme table at or after a candidate element.

    Args:
        candidate: First element to check
        max_probe: Maximum number of elements to check

    Returns:
        The table element, or None if no table appears before the next
        series heading, the end of the siblings or the probe limit
    """
    element = candidate
    probed = 0
    while element is not None and probed < max_probe:
        if element.name == "table":
            return element
        if element.name == "h3":
            return None
        element = element.find_next_sibling()
        probed += 1
    return None


def table_rows(table: Tag) -> list[Tag]:
    """Data rows of a table, header rows excluded."""
    bodies = table.find_all("tbody", recursive=False)
    if bodies:
        rows = [row for body in bodies for row in body.find_all("tr", recursive=False)]
    else:
        rows = table.find_all("tr", recursive=False)
    return [row for row in rows if row.find("td", recursive=False) is not None]


def parse_table(table: Tag) -> list[ThemeModel]:
    """
    Parse a theme table into themes, one per row.

    Cells are read in fixed order: name, link, episodes, notes.
    Missing cells become empty strings, a missing link becomes None.
    """
    themes: list[ThemeModel] = []
    for row in table_rows(table):
        cells = row.find_all("td", recursive=False)
        cell_text = [cell.get_text() for cell in cells]
        name = unescape_quotes(cell_text[0]) if cell_text else ""

        link: Optional[str] = None
        if len(cells) > 1:
            first_child = cells[1].find(True, recursive=False)
            if first_child is not None:
                link = first_child.get("href")

        themes.append(ThemeModel.from_row(
            name=name,
            link=link,
            episodes=cell_text[2] if len(cell_text) > 2 else "",
            notes=cell_text[3] if len(cell_text) > 3 else "",
        ))
    return themes


def parse_anime(heading: Tag, max_probe: int = MAX_TABLE_PROBE) -> AnimeModel:
    """
    Parse one series heading and the theme table that follows it.

    An alternate-titles paragraph between the heading and the table is
    skipped. The year is left empty for the caller to fill in.
    """
    anchor = heading.find("a", recursive=False)
    title = anchor.get_text() if anchor is not None else ""
    anime_id = path_segment(anchor.get("href") if anchor is not None else None, ANIME_ID_SEGMENT)

    candidate = heading.find_next_sibling()
    if candidate is not None and candidate.name == "p":
        candidate = candidate.find_next_sibling()

    table = find_table(candidate, max_probe)
    themes = parse_table(table) if table is not None else []

    return AnimeModel(id=anime_id, title=title, themes=themes)


def parse_year_html(html: str, year: str | int) -> list[AnimeModel]:
    """Parse a normalized year page into its anime, in heading order."""
    soup = parse_html(html)
    return [parse_anime(heading).with_year(str(year)) for heading in soup.find_all("h3")]


def parse_year_links(html: str) -> list[str]:
    """
    Parse the normalized year index page into year identifiers.

    Returns:
        Years in index order, without duplicates or empty entries
    """
    soup = parse_html(html)
    years: list[str] = []
    for anchor in soup.select("h3 a"):
        year = path_segment(anchor.get("href"), YEAR_SEGMENT)
        if not year:
            print(f"Skipping year link without a year: {anchor.get('href')!r}", file=sys.stderr)
            continue
        if year not in years:
            years.append(year)
    return years


async def fetch_wiki_html(
    session: aiohttp.ClientSession,
    page: str | int,
    base_url: str = REDDIT_BASE_URL,
    user_agent: str = USER_AGENT,
) -> str:
    """
    Fetch a wiki page through the JSON API and return its normalized HTML.

    Args:
        session: aiohttp session
        page: Wiki page name (a year or the year index)
        base_url: Site base URL
        user_agent: Client identifier sent with the request

    Returns:
        Content HTML with its tags unescaped
    """
    url = wiki_page_url(page, base_url)
    async with session.get(url, headers={"User-Agent": user_agent}) as response:
        if response.status != 200:
            raise WikiFetchError(url, response.status)
        payload = await response.json(content_type=None)

    try:
        content_html = payload["data"]["content_html"]
    except (KeyError, TypeError) as e:
        raise WikiFormatError(url, message=f"No content_html in {url}") from e

    return normalize_content_html(content_html)


async def scrape_year(
    session: aiohttp.ClientSession,
    year: str | int,
    base_url: str = REDDIT_BASE_URL,
    user_agent: str = USER_AGENT,
) -> list[AnimeModel]:
    """Fetch one year page and return its anime stamped with the year."""
    html = await fetch_wiki_html(session, year, base_url, user_agent)
    return parse_year_html(html, year)


async def scrape_all_years(
    base_url: str = REDDIT_BASE_URL,
    user_agent: str = USER_AGENT,
    skip_failed: bool = False,
    on_year_scraped: Optional[Callable[[str, list[AnimeModel]], None]] = None,
    session: Optional[aiohttp.ClientSession] = None,
) -> list[AnimeModel]:
    """
    Scrape every year listed on the year index.

    All year pages are requested at once. Results are joined in
    year-index order, then heading order within a year.

    Args:
        base_url: Site base URL
        user_agent: Client identifier sent with each request
        skip_failed: Drop years whose fetch fails instead of raising
        on_year_scraped: Callback when a year is scraped
        session: Existing session to use (a new one is opened otherwise)

    Returns:
        List of all scraped AnimeModels
    """
    if session is None:
        async with aiohttp.ClientSession() as own_session:
            return await scrape_all_years(
                base_url=base_url,
                user_agent=user_agent,
                skip_failed=skip_failed,
                on_year_scraped=on_year_scraped,
                session=own_session,
            )

    index_html = await fetch_wiki_html(session, YEAR_INDEX_PAGE, base_url, user_agent)
    years = parse_year_links(index_html)

    async def scrape_one(year: str) -> list[AnimeModel]:
        animes = await scrape_year(session, year, base_url, user_agent)
        if on_year_scraped:
            on_year_scraped(year, animes)
        return animes

    tasks = [asyncio.create_task(scrape_one(year)) for year in years]
    try:
        results = await asyncio.gather(*tasks, return_exceptions=skip_failed)
    except BaseException:
        # Years still in flight must not outlive the session
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    all_animes: list[AnimeModel] = []
    for year, result in zip(years, results):
        if isinstance(result, BaseException):
            # Only reachable with skip_failed, gather raises otherwise
            if not isinstance(result, Exception):
                raise result
            print(f"Error scraping year {year}: {result}", file=sys.stderr)
            continue
        all_animes.extend(result)

    return all_animes


def save_anime_data(animes: list[AnimeModel], path: Path = OUTPUT_JSON_PATH) -> int:
    """Save all anime to a single JSON array file and return the count written."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump([anime.model_dump() for anime in animes], f, indent=2, ensure_ascii=False)
    return len(animes)


def load_anime_data(path: Path = OUTPUT_JSON_PATH) -> list[AnimeModel]:
    """Load anime from a previously written JSON file."""
    path = Path(path)
    if not path.exists():
        return []
    with open(path, "r", encoding="utf-8") as f:
        return [AnimeModel.model_validate(item) for item in json.load(f)]
