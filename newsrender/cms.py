"""
Books, pages and page capture, as needed by the news renderer.

BaseCMS is the interface the resolver is written against. SemanticCMS is an
in-memory implementation which reads its books from configuration.
"""
import logging
import posixpath

from newsrender import config
from newsrender.core.errors import ConfigurationError, PageNotFound
from newsrender.core.model import BookRef, Page, PageRef

logger = logging.getLogger("newsrender.cms")


def parse_book_ref(s):
    """Parses a book reference of the form [domain:]path.

    >>> parse_book_ref("example.com:/docs")
    <bookref: 'example.com:/docs'>
    >>> parse_book_ref("/docs")
    <bookref: 'localhost:/docs'>
    """
    domain, _, path = s.rpartition(":")
    return BookRef(domain or None, path)


def resolve_path(current_path, path):
    """Resolves path against the directory of current_path.

    >>> resolve_path("/a/b", "c")
    '/a/c'
    >>> resolve_path("/a/b/", "../c/")
    '/a/c/'
    >>> resolve_path("/a/b", "/x/./y")
    '/x/y'
    >>> resolve_path("/a", "../../x")
    Traceback (most recent call last):
        ...
    newsrender.core.errors.ConfigurationError: {"error": "bad_config", "message": "malformed path, climbs above book root: /../../x"}
    """
    if not path.startswith("/"):
        path = posixpath.join(posixpath.dirname(current_path), path)

    parts = []
    for p in path.split("/"):
        if p in ("", "."):
            continue
        elif p == "..":
            if not parts:
                raise ConfigurationError(
                    "malformed path, climbs above book root: %s" % path
                )
            parts.pop()
        else:
            parts.append(p)

    resolved = "/" + "/".join(parts)
    if parts and path.endswith("/"):
        resolved += "/"
    return resolved


class BaseCMS:
    """Interface to the content system the news renderer runs in."""

    def get_page_ref(self, domain, book, path, current_page):
        """Returns the PageRef for a possibly relative reference.

        When domain or book is None, it defaults to that of current_page.
        """
        raise NotImplementedError

    def capture_page(self, page_ref, capture_level):
        """Returns the page populated at least to the given capture level."""
        raise NotImplementedError

    def get_book(self, book_ref):
        """Returns the Book for book_ref. The book may not be accessible."""
        raise NotImplementedError

    def get_broken_path(self, page_ref, element=None):
        """Placeholder text for a link whose target can not be reached.

        >>> ref = PageRef(BookRef("example.com", "/docs"), "/x")
        >>> BaseCMS().get_broken_path(ref)
        '¿example.com:/docs/x?'
        >>> BaseCMS().get_broken_path(ref, "sec1")
        '¿example.com:/docs/x#sec1?'
        """
        if element is None:
            return "¿%s?" % page_ref
        return "¿%s#%s?" % (page_ref, element)

    def clear_cache(self):
        """Called at the end of every request to forget the pages captured in it."""
        pass


class Book:
    def __init__(self, book_ref, pages=None, accessible=True):
        self.book_ref = book_ref
        # page path -> page data, or a function(page_ref, capture_level) returning a Page
        self.pages = pages or {}
        self.accessible = accessible

    def is_accessible(self):
        return self.accessible

    def load_page(self, page_ref, capture_level):
        data = self.pages.get(page_ref.path)
        if data is None:
            raise PageNotFound(page_ref)
        if callable(data):
            return data(page_ref, capture_level)
        return Page.from_data(page_ref, data, capture_level)

    def __repr__(self):
        return "<book: %s>" % repr(str(self.book_ref))


class SemanticCMS(BaseCMS):
    def __init__(self):
        self.books = {}
        # cache for storing pages captured in this request
        self._cache = {}

    @classmethod
    def from_config(cls):
        """Creates a SemanticCMS with the books from config."""
        cms = cls()
        for name, d in config.books.items():
            if not isinstance(d, dict):
                raise ConfigurationError("book %s must be a mapping with pages, found %r" % (name, d))
            cms.add_book(Book(parse_book_ref(name), d.get('pages')))
        for name in config.missing_books:
            cms.add_book(Book(parse_book_ref(name), accessible=False))
        return cms

    def add_book(self, book):
        if book.book_ref in self.books:
            raise ConfigurationError("duplicate book: %s" % book.book_ref)
        self.books[book.book_ref] = book
        return book

    def get_book(self, book_ref):
        try:
            return self.books[book_ref]
        except KeyError:
            raise ConfigurationError("book not found: %s" % book_ref)

    def get_page_ref(self, domain, book, path, current_page):
        if book is None:
            if domain is not None:
                raise ConfigurationError("book required when domain provided.")
            if current_page is None:
                raise ConfigurationError(
                    "unable to resolve %s without a current page" % path
                )
            current_ref = current_page.page_ref
            return PageRef(current_ref.book_ref, resolve_path(current_ref.path, path))

        if not path.startswith("/"):
            raise ConfigurationError(
                "When book provided, path must begin with a slash (/): %s" % path
            )
        if domain is None and current_page is not None:
            domain = current_page.page_ref.book_ref.domain
        book_ref = BookRef(domain, book)

        # fails for unknown books, missing books are fine
        self.get_book(book_ref)
        return PageRef(book_ref, resolve_path("/", path))

    def capture_page(self, page_ref, capture_level):
        page = self._cache.get(page_ref)
        if page is not None and page.capture_level >= capture_level:
            return page

        book = self.get_book(page_ref.book_ref)
        if not book.is_accessible():
            raise ConfigurationError("unable to capture page in missing book: %s" % page_ref)

        logger.debug("capturing %s at %s", page_ref, capture_level.name)
        page = book.load_page(page_ref, capture_level)
        self._cache[page_ref] = page
        return page

    def clear_cache(self):
        self._cache.clear()
