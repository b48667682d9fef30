"""
Interface du dépôt de livres.

Le stockage persistant est un collaborateur externe ; le moteur ne
dépend que de ce protocole. InMemoryBookRepository sert au mode CLI
et aux tests.
"""

import logging
import threading
from dataclasses import replace
from typing import Dict, List, Optional, Protocol

from .models import BookMetadata

logger = logging.getLogger(__name__)


class BookRepository(Protocol):
    def get(self, book_id: int) -> Optional[BookMetadata]: ...

    def insert(self, book: BookMetadata) -> int: ...

    def update(self, book_id: int, book: BookMetadata) -> None: ...

    def delete(self, book_id: int) -> None: ...


class InMemoryBookRepository:
    """Dépôt en mémoire, protégé par un verrou."""

    def __init__(self):
        self._books: Dict[int, BookMetadata] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def get(self, book_id: int) -> Optional[BookMetadata]:
        with self._lock:
            book = self._books.get(book_id)
            return replace(book) if book else None

    def insert(self, book: BookMetadata) -> int:
        with self._lock:
            book_id = self._next_id
            self._next_id += 1
            self._books[book_id] = replace(book)
        logger.debug("Inserted book %d: %s", book_id, book.title)
        return book_id

    def update(self, book_id: int, book: BookMetadata) -> None:
        with self._lock:
            if book_id not in self._books:
                raise KeyError(book_id)
            self._books[book_id] = replace(book)

    def delete(self, book_id: int) -> None:
        with self._lock:
            self._books.pop(book_id, None)

    def all(self) -> List[BookMetadata]:
        with self._lock:
            return [replace(b) for b in self._books.values()]
