import pytest

from tests.wiki_helpers import YEAR_INDEX_HTML, FakeSession, wiki_payload, year_page_html


@pytest.fixture
def wiki_session() -> FakeSession:
    """Year index listing 1990 and 1991, each year holding one anime."""
    return FakeSession({
        "https://reddit.com/r/AnimeThemes/wiki/year_index.json": (200, wiki_payload(YEAR_INDEX_HTML)),
        "https://reddit.com/r/AnimeThemes/wiki/1990.json": (200, wiki_payload(year_page_html("100", "Ninety"))),
        "https://reddit.com/r/AnimeThemes/wiki/1991.json": (200, wiki_payload(year_page_html("200", "Ninety One"))),
    })
