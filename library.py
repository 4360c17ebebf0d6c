import logging
import threading
import time
from typing import List, Optional, Set

from book import Book
from metrics import (
    ADD_BOOK_DURATION,
    BOOKS_ADDED,
    BOOKS_SEARCHED,
    SEARCH_BOOK_DURATION,
    MetricsRecorder,
    NullMetrics,
)

logger = logging.getLogger(__name__)


def _is_blank(value: str) -> bool:
    """Blank means only ASCII control characters and spaces (code points up to U+0020).

    Unicode spaces such as U+00A0 are real ISBN characters here.
    """
    return all(ch <= " " for ch in value)


class Library:
    """Manages the in-memory collection of books.

    Uniqueness is full-field value equality, so two books sharing an ISBN but
    differing in title, author or year are separate entries. ``has_book`` only
    looks at the ISBN and cannot tell such entries apart.
    """

    def __init__(self, metrics: Optional[MetricsRecorder] = None) -> None:
        self.metrics = metrics if metrics is not None else NullMetrics()
        self._books: Set[Book] = set()
        self._lock = threading.Lock()
        logger.info("Library initialized with metrics collection enabled")

    # ------------------------- Core operations ------------------------- #
    def add_book(self, book: Optional[Book]) -> bool:
        """Add a book. Returns False for None or when an equal book is already stored."""
        if book is None:
            logger.warning("Attempted to add null book")
            return False

        start = time.perf_counter()
        try:
            with self._lock:
                before = len(self._books)
                self._books.add(book)
                added = len(self._books) != before
            if added:
                self.metrics.increment(BOOKS_ADDED)
                logger.info("Book added successfully: %s", book.title)
            else:
                logger.info("Book already exists: %s", book.title)
            return added
        finally:
            self.metrics.record_duration(ADD_BOOK_DURATION, time.perf_counter() - start)

    def has_book(self, isbn: Optional[str]) -> bool:
        """Return True if any stored book carries exactly this ISBN."""
        if isbn is None or _is_blank(isbn):
            logger.warning("Attempted to search with null or empty ISBN")
            return False

        start = time.perf_counter()
        try:
            self.metrics.increment(BOOKS_SEARCHED)
            with self._lock:
                found = any(book.isbn == isbn for book in self._books)
            logger.info("Book search for ISBN %s: %s", isbn, "FOUND" if found else "NOT FOUND")
            return found
        finally:
            self.metrics.record_duration(SEARCH_BOOK_DURATION, time.perf_counter() - start)

    def total_books(self) -> int:
        with self._lock:
            return len(self._books)

    def list_books(self) -> List[Book]:
        with self._lock:
            return list(self._books)

    def replace_book(self, old: Optional[Book], new: Optional[Book]) -> bool:
        """Swap a stored book for a changed copy of it.

        Fails when ``old`` is not stored or ``new`` would collide with another entry.
        """
        if old is None or new is None:
            logger.warning("Attempted to replace with null book")
            return False
        with self._lock:
            if old not in self._books:
                logger.info("Book to replace not found: %s", old.title)
                return False
            if new != old and new in self._books:
                logger.info("Replacement already exists: %s", new.title)
                return False
            self._books.discard(old)
            self._books.add(new)
        logger.info("Book replaced: %s -> %s", old, new)
        return True

    def remove_book(self, book: Optional[Book]) -> bool:
        if book is None:
            return False
        with self._lock:
            if book not in self._books:
                return False
            self._books.remove(book)
        logger.info("Book removed: %s", book.title)
        return True

    def __len__(self) -> int:
        return self.total_books()
