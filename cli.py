#!/usr/bin/env python3
"""
Civic Posts maintenance CLI.

Usage:
    python cli.py init-db
    python cli.py resync-author-names --batch-size 500
    python cli.py home-page
    python cli.py revalidate /news
"""

import asyncio
import logging

import click
from rich.console import Console
from rich.table import Table

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S",
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
def cli(verbose: bool):
    """Civic Posts CLI."""
    _configure_logging(verbose)


@cli.command("init-db")
def init_db_command():
    """Create missing database tables."""
    from civicposts.infrastructure.config.database import init_db

    asyncio.run(init_db())
    console.print("[bold green]Tables created[/bold green]")


@cli.command("resync-author-names")
@click.option("--batch-size", default=500, show_default=True, help="Articles per batch")
def resync_author_names(batch_size: int):
    """
    Back-fill articles that have no author name.

    Articles whose author no longer exists are left unchanged.
    """

    async def run() -> int:
        from civicposts.api.dependencies import get_page_invalidator, get_response_cache
        from civicposts.application.services.author_name_resolver import AuthorNameResolver
        from civicposts.application.services.cache_invalidation import CacheInvalidationCoordinator
        from civicposts.infrastructure.config.database import AsyncSessionLocal
        from civicposts.infrastructure.persistence.article_repository_impl import ArticleRepositoryImpl
        from civicposts.infrastructure.persistence.author_repository_impl import AuthorRepositoryImpl

        async with AsyncSessionLocal() as session:
            resolver = AuthorNameResolver(
                ArticleRepositoryImpl(session),
                AuthorRepositoryImpl(session),
                CacheInvalidationCoordinator(get_response_cache(), get_page_invalidator()),
            )
            return await resolver.resync_missing_author_names(batch_size=batch_size)

    filled = asyncio.run(run())
    console.print(f"[bold green]Done.[/bold green] Back-filled: {filled}")


@cli.command("home-page")
def home_page():
    """Print the current home-page layout."""

    async def run():
        from civicposts.application.services.article_service import ArticleService
        from civicposts.application.services.background import SideEffectRunner
        from civicposts.infrastructure.cache.memory_cache import InMemoryResponseCache
        from civicposts.infrastructure.config.database import AsyncSessionLocal
        from civicposts.infrastructure.persistence.article_repository_impl import ArticleRepositoryImpl

        async with AsyncSessionLocal() as session:
            service = ArticleService(ArticleRepositoryImpl(session), InMemoryResponseCache(), SideEffectRunner())
            return await service.home_page()

    layout = asyncio.run(run())

    table = Table(title="Home page")
    table.add_column("Slot", style="cyan")
    table.add_column("#", justify="right")
    table.add_column("Title")
    table.add_column("Created", style="dim")

    slots = [
        ("Top stories", layout.top_stories),
        ("Mini top stories", layout.mini_top_stories),
        ("Trending", layout.trending),
    ]
    slots += [
        (f"Latest: {category.display_name}", articles)
        for category, articles in layout.latest_by_category.items()
    ]
    for name, articles in slots:
        for position, article in enumerate(articles, start=1):
            table.add_row(name, str(position), article.title, article.created_at.strftime("%Y-%m-%d %H:%M"))

    if layout.is_empty():
        console.print("[yellow]No promoted articles are visible right now[/yellow]")
    else:
        console.print(table)


@cli.command()
@click.argument("paths", nargs=-1, required=True)
def revalidate(paths):
    """Trigger regeneration of statically generated pages."""
    from civicposts.api.dependencies import get_page_invalidator

    async def run():
        invalidator = get_page_invalidator()
        for path in paths:
            await invalidator.invalidate(path)
            console.print(f"  revalidated [cyan]{path}[/cyan]")

    asyncio.run(run())


@cli.command("show-config")
def show_config():
    """Print the effective settings (secrets masked)."""
    from civicposts.infrastructure.config.settings import get_settings

    settings = get_settings()
    table = Table(title="Settings")
    table.add_column("Name", style="cyan")
    table.add_column("Value")
    for name, value in settings.model_dump().items():
        if value and ("secret" in name or "key" in name or name == "database_url"):
            value = "***"
        table.add_row(name, str(value))
    console.print(table)


if __name__ == "__main__":
    cli()
