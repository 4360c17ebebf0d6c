import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from book import Book
from config import settings
from library import Library
from metrics import MetricsRegistry, log_metrics

APP_NAME = "Library CLI"

console = Console()
logger = logging.getLogger(__name__)

app = typer.Typer(help=APP_NAME)

SAMPLE_BOOKS = [
    Book("978-0134685991", "Effective Java", "Joshua Bloch", 2017),
    Book("978-0201633610", "Design Patterns", "Erich Gamma", 1994),
    Book("978-0596009205", "Head First Java", "Kathy Sierra", 2005),
]


@app.callback()
def main(log_level: str = typer.Option(settings.log_level, "--log-level", help="Logging level")) -> None:
    logging.basicConfig(level=log_level.upper(), format="%(asctime)s %(levelname)s %(name)s - %(message)s")


def load_books(path: Path) -> List[Book]:
    """Read a JSON array of book objects (isbn, title, author, year)."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError("expected a JSON array of books")
    return [Book.from_dict(item) for item in data]


def print_books(books: Iterable[Book]) -> None:
    books = sorted(books, key=lambda b: b.isbn)
    if not books:
        console.print("No books in library.")
        return

    table = Table(title="Books", header_style="bold cyan")
    table.add_column("ISBN", style="magenta", no_wrap=True)
    table.add_column("Title")
    table.add_column("Author")
    table.add_column("Year", justify="right")
    for book in books:
        table.add_row(book.isbn, book.title, book.author, str(book.year))
    console.print(table)
    console.print(f"Total books in library: {len(books)}")


def run_demo(library: Library) -> None:
    """Add the sample books, try a duplicate, probe a few ISBNs and list the result."""
    logger.info("=== Library Management System Demo ===")
    logger.info("Adding books to library...")
    for book in SAMPLE_BOOKS:
        library.add_book(book)

    # Same values as the first sample, so it must be rejected
    library.add_book(Book("978-0134685991", "Effective Java", "Joshua Bloch", 2017))

    logger.info("Searching for books...")
    for isbn in ("978-0134685991", "978-0201633610", "999-9999999999"):
        logger.info("Has book with ISBN %s: %s", isbn, library.has_book(isbn))

    logger.info("All books in library:")
    for book in library.list_books():
        logger.info("  - %s by %s (%s)", book.title, book.author, book.isbn)


@app.command("demo")
def cli_demo() -> None:
    """Run the sample catalog walkthrough."""
    logger.info("Starting Library Management System...")
    registry = MetricsRegistry()
    library = Library(registry)
    run_demo(library)
    log_metrics(registry, settings.metrics_prefix)
    logger.info("Library Management System demo completed.")
    print_books(library.list_books())


@app.command("list")
def cli_list(
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="JSON file with books to load"),
    sample: bool = typer.Option(False, "--sample", help="Load the sample books"),
) -> None:
    """Load books into a fresh catalog and list it; duplicates collapse."""
    library = Library()
    if sample:
        for book in SAMPLE_BOOKS:
            library.add_book(book)
    if file is not None:
        try:
            books = load_books(file)
        except (OSError, ValueError, KeyError, TypeError) as e:
            console.print(f"[bold red]Could not load books from {escape(str(file))}: {escape(str(e))}[/]")
            raise typer.Exit(code=1)
        for book in books:
            library.add_book(book)
    print_books(library.list_books())


@app.command("serve")
def cli_serve(
    host: str = typer.Option(settings.api_host, "--host", help="Bind address"),
    port: int = typer.Option(settings.api_port, "--port", help="Bind port"),
) -> None:
    """Run the REST API."""
    import uvicorn

    uvicorn.run("api:app", host=host, port=port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    app()
