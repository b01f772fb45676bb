"""Command-line interface for radio-scraper."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Optional, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from radio_scraper import __version__
from radio_scraper.config import AppConfig
from radio_scraper.fetcher import HttpFetcher
from radio_scraper.menu import MenuCrawler
from radio_scraper.models import MenuCategory, RadioCategory
from radio_scraper.orchestrator import CategoryCrawler
from radio_scraper.storage import BaseStore, create_store

app = typer.Typer(
    name="radio-scraper",
    help="Crawl an internet radio directory into a resumable station dataset.",
    rich_markup_mode="rich",
    no_args_is_help=True,
)

console = Console()

T = TypeVar("T")


def version_callback(value: bool):
    if value:
        console.print(f"radio-scraper version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
):
    """Internet radio directory crawler."""
    pass


BaseUrlOption = typer.Option(None, "--base-url", "-u", help="Directory site root URL")
StorageOption = typer.Option(
    None,
    "--storage",
    "-s",
    help="Directory for persisted categories (enables resuming)",
)
DelayOption = typer.Option(None, "--delay", help="Delay between page requests in seconds")
TimeoutOption = typer.Option(None, "--timeout", help="Request timeout in milliseconds")
ConfigOption = typer.Option(None, "--config", "-c", help="TOML configuration file")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Enable verbose output")


def build_config(
    config_file: Optional[Path] = None,
    base_url: Optional[str] = None,
    storage: Optional[Path] = None,
    delay: Optional[float] = None,
    timeout: Optional[int] = None,
    verbose: bool = False,
) -> AppConfig:
    """Merge command-line overrides into the (optional) TOML config."""
    config = AppConfig.from_toml(config_file) if config_file else AppConfig()

    updates: dict = {}
    if base_url:
        updates["base_url"] = base_url
    if verbose:
        updates["verbose"] = True
    if storage is not None:
        updates["storage"] = config.storage.model_copy(update={"directory": storage})
    if delay is not None:
        updates["rate_limit"] = config.rate_limit.model_copy(update={"delay_seconds": delay})
    if timeout is not None:
        updates["fetcher"] = config.fetcher.model_copy(update={"timeout_ms": timeout})

    # model_copy does not validate
    return AppConfig.model_validate(config.model_copy(update=updates).model_dump())


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=verbose)],
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def _run(config: AppConfig, job: Callable[[HttpFetcher, BaseStore], Awaitable[T]]) -> T:
    """Run ``job`` with an open fetcher and its store, mapping failures to exit codes."""

    async def runner() -> T:
        async with HttpFetcher(config.fetcher) as fetcher:
            store = create_store(config.storage.directory, fetcher, config.rate_limit)
            return await job(fetcher, store)

    try:
        return asyncio.run(runner())
    except KeyboardInterrupt:
        console.print("\n[yellow]Crawl interrupted; rerun to resume.[/yellow]")
        raise typer.Exit(130)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        if config.verbose:
            console.print_exception()
        raise typer.Exit(1)


@app.command()
def categories(
    base_url: Optional[str] = BaseUrlOption,
    storage: Optional[Path] = StorageOption,
    delay: Optional[float] = DelayOption,
    timeout: Optional[int] = TimeoutOption,
    config_file: Optional[Path] = ConfigOption,
    verbose: bool = VerboseOption,
):
    """
    Crawl every genre on the station index.

    With --storage, categories are saved after each genre and a rerun only
    fetches genres that are still missing.

    Examples:

        radio-scraper categories -s ./radio

        radio-scraper categories -s ./radio --delay 2.0 -v
    """
    config = build_config(config_file, base_url, storage, delay, timeout, verbose)
    _setup_logging(config.verbose)
    result = _run(
        config,
        lambda fetcher, store: CategoryCrawler(config, fetcher, store).get_all_radio_categories(),
    )
    _print_categories(result, title="Radio categories")


@app.command()
def menu(
    base_url: Optional[str] = BaseUrlOption,
    storage: Optional[Path] = StorageOption,
    delay: Optional[float] = DelayOption,
    timeout: Optional[int] = TimeoutOption,
    config_file: Optional[Path] = ConfigOption,
    skip_malformed: bool = typer.Option(
        False,
        "--skip-malformed",
        help="Skip menu entries without a label instead of failing",
    ),
    verbose: bool = VerboseOption,
):
    """Crawl the navigation menu, fetching the genres under "Listen"."""
    config = build_config(config_file, base_url, storage, delay, timeout, verbose)
    _setup_logging(config.verbose)
    result = _run(
        config,
        lambda fetcher, store: MenuCrawler(config, fetcher, store).get_all_categories(skip_malformed),
    )
    _print_menu(result)


@app.command()
def listen(
    base_url: Optional[str] = BaseUrlOption,
    storage: Optional[Path] = StorageOption,
    delay: Optional[float] = DelayOption,
    timeout: Optional[int] = TimeoutOption,
    config_file: Optional[Path] = ConfigOption,
    verbose: bool = VerboseOption,
):
    """Crawl only the "Listen" menu entry."""
    config = build_config(config_file, base_url, storage, delay, timeout, verbose)
    _setup_logging(config.verbose)
    result = _run(
        config,
        lambda fetcher, store: MenuCrawler(config, fetcher, store).get_listen_category(),
    )
    _print_categories(result.subcategories, title=result.name)


def _print_categories(categories: list[RadioCategory], title: str) -> None:
    table = Table(title=title)
    table.add_column("Category", style="cyan")
    table.add_column("Stations", justify="right")
    table.add_column("Playlists", justify="right")

    for category in categories:
        playlists = sum(len(s.playlists) for s in category.stations)
        table.add_row(category.name, str(len(category.stations)), str(playlists))

    console.print(table)


def _print_menu(groups: list[MenuCategory]) -> None:
    table = Table(title="Navigation menu")
    table.add_column("Menu entry", style="cyan")
    table.add_column("Categories", justify="right")
    table.add_column("Stations", justify="right")

    for group in groups:
        stations = sum(len(c.stations) for c in group.subcategories)
        table.add_row(group.name, str(len(group.subcategories)), str(stations))

    console.print(table)


if __name__ == "__main__":
    app()
