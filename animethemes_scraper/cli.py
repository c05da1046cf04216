"""CLI entry point for scraping the AnimeThemes wiki."""

import asyncio
import json
from pathlib import Path

import aiohttp
import click

from .constants.config import REDDIT_BASE_URL, USER_AGENT
from .constants.paths import OUTPUT_JSON_PATH


@click.group(invoke_without_command=True)
@click.pass_context
def cli(ctx: click.Context):
    """AnimeThemes - scrape opening and ending themes from the r/AnimeThemes wiki."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(scrape)


@cli.command("scrape")
@click.option(
    "--output", "-o",
    default=str(OUTPUT_JSON_PATH),
    type=click.Path(dir_okay=False),
    help="File to write the anime JSON array to (default: output.json)"
)
@click.option(
    "--base-url",
    default=REDDIT_BASE_URL,
    help=f"Site base URL (default: {REDDIT_BASE_URL})"
)
@click.option(
    "--user-agent",
    default=USER_AGENT,
    help=f"User-Agent header sent with each request (default: {USER_AGENT})"
)
@click.option(
    "--skip-failed",
    is_flag=True,
    help="Keep going when a year page fails, writing the years that succeeded"
)
def scrape(output: str, base_url: str, user_agent: str, skip_failed: bool):
    """Scrape every year on the wiki and write all anime to a JSON file.
    
    Examples:
    
        animethemes scrape
        
        animethemes scrape -o data/themes.json --skip-failed
    """
    from .scrapers.themes import WikiFetchError, save_anime_data, scrape_all_years
    
    def on_year_scraped(year, animes):
        click.echo(f"Year {year}: {len(animes)} anime", err=True)
    
    try:
        animes = asyncio.run(scrape_all_years(
            base_url=base_url,
            user_agent=user_agent,
            skip_failed=skip_failed,
            on_year_scraped=on_year_scraped,
        ))
    except (WikiFetchError, aiohttp.ClientError) as e:
        raise click.ClickException(str(e)) from e
    
    count = save_anime_data(animes, Path(output))
    click.echo(f"Parsed {count} anime. Written to {output}")


@cli.command("year")
@click.argument("year")
@click.option(
    "--output", "-o",
    default=None,
    type=click.Path(dir_okay=False),
    help="File to write the anime JSON array to (default: print to stdout)"
)
@click.option("--base-url", default=REDDIT_BASE_URL, help="Site base URL")
@click.option("--user-agent", default=USER_AGENT, help="User-Agent header sent with the request")
def year(year: str, output: str | None, base_url: str, user_agent: str):
    """Scrape a single year page (e.g. 2005 or 90s).
    
    Examples:
    
        animethemes year 2005
        
        animethemes year 90s -o 90s.json
    """
    from .scrapers.themes import WikiFetchError, save_anime_data, scrape_year
    
    async def run():
        async with aiohttp.ClientSession() as session:
            return await scrape_year(session, year, base_url, user_agent)
    
    try:
        animes = asyncio.run(run())
    except (WikiFetchError, aiohttp.ClientError) as e:
        raise click.ClickException(str(e)) from e
    
    if output:
        count = save_anime_data(animes, Path(output))
        click.echo(f"Parsed {count} anime. Written to {output}")
    else:
        click.echo(json.dumps([anime.model_dump() for anime in animes], indent=2, ensure_ascii=False))
