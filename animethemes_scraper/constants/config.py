"""Scraper configuration constants."""

# Wiki API
REDDIT_BASE_URL = "https://reddit.com"
WIKI_PATH = "/r/AnimeThemes/wiki"
YEAR_INDEX_PAGE = "year_index"
USER_AGENT = "animethemes-scraper 1.0"

# Slash-delimited href segments holding the MAL id and the year
ANIME_ID_SEGMENT = 4
YEAR_SEGMENT = 4

# How many siblings after a heading are searched for its theme table
MAX_TABLE_PROBE = 8
