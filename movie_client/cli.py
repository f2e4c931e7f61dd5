"""Terminal front end for the movie search API.

Usage:
    movie-client search "star wars" --page 2
    movie-client favorites
    movie-client add tt0133093 --title "The Matrix" --year 1999
    movie-client remove tt0133093
"""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Awaitable, Callable
from typing import TypeVar

import click
from rich.console import Console
from rich.table import Table

from movie_client.api import MovieApiClient
from movie_client.models import FavoritesData, Movie, SearchMoviesData
from movie_client.queries import MovieQueries
from movie_client.result import Failure

console = Console()

T = TypeVar("T")

# Matches the provider's fixed page size for search results.
SEARCH_PAGE_SIZE = 10


def _report(message: str) -> None:
    console.print(f"[red]✗ {message}[/red]")


def _run(
    action: Callable[[MovieQueries], Awaitable[T]],
    api_url: str | None,
    *,
    report_failure: bool = False,
) -> T:
    """Run ``action`` against a fresh client.

    Mutations report their own failures; reads pass ``report_failure`` so the
    same user-facing wording is printed for them.
    """

    async def runner() -> T:
        async with MovieApiClient(api_url) as api:
            queries = MovieQueries(api, on_error=_report)
            result = await action(queries)
            if report_failure and isinstance(result, Failure):
                queries.report(result.error)
            return result

    return asyncio.run(runner())


def _year(value: int) -> str:
    return str(value) if value else "N/A"


def _search_table(data: SearchMoviesData) -> Table:
    table = Table(title="Search results", show_lines=False)
    table.add_column("★", justify="center", width=2)
    table.add_column("Title", style="bold")
    table.add_column("Year", justify="right")
    table.add_column("IMDb ID", style="cyan")
    for movie in data.movies:
        table.add_row("★" if movie.is_favorite else "", movie.title, _year(movie.year), movie.imdb_id)
    return table


def _favorites_table(data: FavoritesData) -> Table:
    table = Table(title="Favorites")
    table.add_column("Title", style="bold")
    table.add_column("Year", justify="right")
    table.add_column("IMDb ID", style="cyan")
    for movie in data.favorites:
        table.add_row(movie.title, _year(movie.year), movie.imdb_id)
    return table


def _search_total_pages(total_results: str) -> int:
    try:
        total = int(total_results)
    except ValueError:
        return 0
    return -(-total // SEARCH_PAGE_SIZE) if total > 0 else 0


@click.group()
@click.option(
    "--api-url",
    envvar="MOVIE_API_URL",
    default=None,
    help="Base URL of the movies API (defaults to MOVIE_API_URL).",
)
@click.pass_context
def main(ctx: click.Context, api_url: str | None) -> None:
    """Search movies and manage favorites."""

    ctx.obj = {"api_url": api_url}


@main.command()
@click.argument("query")
@click.option("--page", type=click.IntRange(min=1), default=1, show_default=True)
@click.pass_context
def search(ctx: click.Context, query: str, page: int) -> None:
    """Search movies by title."""

    result = _run(
        lambda queries: queries.search(query, page), ctx.obj["api_url"], report_failure=True
    )
    if isinstance(result, Failure):
        sys.exit(1)

    data = result.value.data
    if not data.movies:
        console.print(f"[yellow]No movies found for '{query}'[/yellow]")
        return

    console.print(_search_table(data))
    console.print(
        f"Page {page} of {_search_total_pages(data.total_results)} "
        f"({data.total_results} results)"
    )


@main.command()
@click.option("--page", type=click.IntRange(min=1), default=1, show_default=True)
@click.pass_context
def favorites(ctx: click.Context, page: int) -> None:
    """List favorite movies."""

    result = _run(
        lambda queries: queries.favorites(page), ctx.obj["api_url"], report_failure=True
    )
    if isinstance(result, Failure):
        sys.exit(1)

    data = result.value.data
    if not data.favorites:
        console.print("[yellow]No favorites yet[/yellow]")
        return

    console.print(_favorites_table(data))
    console.print(f"Page {data.current_page} of {data.total_pages} ({data.total_results} favorites)")


@main.command()
@click.argument("imdb_id")
@click.option("--title", required=True)
@click.option("--year", type=int, default=0)
@click.option("--poster", default="")
@click.pass_context
def add(ctx: click.Context, imdb_id: str, title: str, year: int, poster: str) -> None:
    """Add a movie to favorites."""

    movie = Movie(title=title, imdb_id=imdb_id, year=year, poster=poster)
    result = _run(lambda queries: queries.add_favorite(movie), ctx.obj["api_url"])
    if isinstance(result, Failure):
        sys.exit(1)
    console.print(f"[green]✓ Added {title} to favorites[/green]")


@main.command()
@click.argument("imdb_id")
@click.pass_context
def remove(ctx: click.Context, imdb_id: str) -> None:
    """Remove a movie from favorites."""

    result = _run(lambda queries: queries.remove_favorite(imdb_id), ctx.obj["api_url"])
    if isinstance(result, Failure):
        sys.exit(1)
    console.print(f"[green]✓ Removed {imdb_id} from favorites[/green]")


if __name__ == "__main__":
    main()
