import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from typing import List

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel

from book import Book
from config import settings
from library import Library
from metrics import MetricsRegistry, log_metrics

logger = logging.getLogger(__name__)


async def _report_metrics(registry: MetricsRegistry, interval: float) -> None:
    while True:
        await asyncio.sleep(interval)
        log_metrics(registry, settings.metrics_prefix)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: one catalog per application instance
    logging.basicConfig(level=settings.log_level)
    registry = MetricsRegistry()
    app.state.library = Library(registry)
    reporter = None
    if settings.metrics_report_interval > 0:
        reporter = asyncio.create_task(_report_metrics(registry, settings.metrics_report_interval))
        logger.info("Metrics reporter started (every %ss)", settings.metrics_report_interval)
    yield
    # Shutdown
    if reporter:
        reporter.cancel()
        with suppress(asyncio.CancelledError):
            await reporter
    log_metrics(registry, settings.metrics_prefix)

app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_library(request: Request) -> Library:
    """Dependency returning the catalog owned by the running app."""
    return request.app.state.library


# --- Models ---
class BookModel(BaseModel):
    isbn: str
    title: str
    author: str
    year: int

    def to_book(self) -> Book:
        return Book(isbn=self.isbn, title=self.title, author=self.author, year=self.year)


# --- Endpoints ---
@app.post("/books", response_class=PlainTextResponse)
def add_book(payload: BookModel, library: Library = Depends(get_library)):
    if library.add_book(payload.to_book()):
        return PlainTextResponse("Book added successfully")
    return PlainTextResponse("Book already exists", status_code=400)


@app.get("/books/{isbn}", response_class=PlainTextResponse)
def has_book(isbn: str, library: Library = Depends(get_library)):
    if library.has_book(isbn):
        return PlainTextResponse("Book exists")
    return Response(status_code=404)


@app.get("/books", response_model=List[BookModel])
def list_books(library: Library = Depends(get_library)) -> List[BookModel]:
    return [BookModel(**book.to_dict()) for book in library.list_books()]
