import web

from newsrender import cms
from newsrender.core.model import BookRef, Element, Page, PageRef


def page_ref(book, path, domain=None):
    return PageRef(BookRef(domain, book), path)


def make_page(book, path, title, elements=()):
    page = Page(page_ref(book, path), title)
    for e in elements:
        page.add_element(e)
    return page


class FakeCMS(cms.BaseCMS):
    """CMS with fixed pages that remembers every capture."""

    def __init__(self, pages=(), missing_books=()):
        self.pages = dict((p.page_ref, p) for p in pages)
        self.missing_books = set(BookRef(None, b) for b in missing_books)
        self.captures = []

    def get_page_ref(self, domain, book, path, current_page):
        current_ref = current_page.page_ref
        if book is None:
            return PageRef(current_ref.book_ref, cms.resolve_path(current_ref.path, path))
        return PageRef(BookRef(domain or current_ref.book_ref.domain, book), path)

    def capture_page(self, page_ref, capture_level):
        self.captures.append((page_ref, capture_level))
        return self.pages[page_ref]

    def get_book(self, book_ref):
        return web.storage(is_accessible=lambda: book_ref not in self.missing_books)


def section(id, label, *children):
    e = Element(id, label)
    for c in children:
        e.add_child(c)
    return e
