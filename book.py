from __future__ import annotations

from dataclasses import asdict, dataclass, replace


@dataclass(frozen=True)
class Book:
    """Represents a single book item in the catalog.

    Books are values: two books are equal when isbn, title, author and year
    all match. Instances are frozen so a stored book can never drift away
    from its hash; use ``replace`` to derive a changed copy.
    """

    isbn: str
    title: str
    author: str
    year: int

    def __str__(self) -> str:
        return (
            f"Book{{isbn='{self.isbn}', title='{self.title}', "
            f"author='{self.author}', year={self.year}}}"
        )

    def replace(self, **changes) -> "Book":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return asdict(self)

    @staticmethod
    def from_dict(data: dict) -> "Book":
        return Book(isbn=data["isbn"], title=data["title"], author=data["author"], year=int(data["year"]))
