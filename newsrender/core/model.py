"""Page model as seen by the news renderer.

Books contain pages and pages contain elements. A news element is an element
that points at another page or element, possibly in another book.
"""
import datetime
import enum
import re

from newsrender import config
from newsrender.core.errors import ConfigurationError


class CaptureLevel(enum.IntEnum):
    """How much of a page is populated by a capture.

    >>> CaptureLevel.PAGE < CaptureLevel.META < CaptureLevel.BODY
    True
    """

    PAGE = 1
    META = 2
    BODY = 3


def normalize_book(path):
    """Book paths always begin with a slash and never end with one, unless root.

    >>> normalize_book("docs")
    '/docs'
    >>> normalize_book("/docs/")
    '/docs'
    >>> normalize_book("/")
    '/'
    """
    return "/" + path.strip("/")


class BookRef:
    """Reference to a book by domain and path.

    >>> BookRef(None, "docs")
    <bookref: 'localhost:/docs'>
    >>> BookRef("example.com", "/docs") == BookRef("example.com", "docs")
    True
    >>> BookRef("example.com", "/docs") == BookRef(None, "/docs")
    False
    """

    def __init__(self, domain, path):
        self.domain = domain or config.default_domain
        self.path = normalize_book(path)

    def __eq__(self, other):
        return (
            isinstance(other, BookRef)
            and self.domain == other.domain
            and self.path == other.path
        )

    def __hash__(self):
        return hash((self.domain, self.path))

    def __str__(self):
        return "%s:%s" % (self.domain, self.path)

    def __repr__(self):
        return "<bookref: %s>" % repr(str(self))


class PageRef:
    """Reference to a page by book and path within the book.

    >>> PageRef(BookRef(None, "/docs"), "/x")
    <pageref: 'localhost:/docs/x'>
    >>> PageRef(BookRef(None, "/"), "/x")
    <pageref: 'localhost:/x'>
    >>> PageRef(BookRef(None, "/docs"), "x")
    Traceback (most recent call last):
        ...
    newsrender.core.errors.ConfigurationError: {"error": "bad_config", "message": "malformed path, must begin with a slash (/): x"}
    """

    def __init__(self, book_ref, path):
        if not path or not path.startswith("/"):
            raise ConfigurationError(
                "malformed path, must begin with a slash (/): %s" % path
            )
        self.book_ref = book_ref
        self.path = path

    @property
    def servlet_path(self):
        if self.book_ref.path == "/":
            return self.path
        return self.book_ref.path + self.path

    def __eq__(self, other):
        return (
            isinstance(other, PageRef)
            and self.book_ref == other.book_ref
            and self.path == other.path
        )

    def __hash__(self):
        return hash((self.book_ref, self.path))

    def __str__(self):
        return "%s:%s" % (self.book_ref.domain, self.servlet_path)

    def __repr__(self):
        return "<pageref: %s>" % repr(str(self))


class Node:
    """Anything that can link to pages."""

    def __init__(self):
        self._page_links = set()

    def add_page_link(self, page_ref):
        self._page_links.add(page_ref)

    @property
    def page_links(self):
        return frozenset(self._page_links)


class Element(Node):
    id_prefix = "element"

    def __init__(self, id=None, label=None):
        Node.__init__(self)
        self.id = id
        self._label = label
        self.page = None
        self.parent_element = None
        self.child_elements = []

    def _get_label(self):
        return self._label

    def _set_label(self, label):
        self._label = label

    label = property(_get_label, _set_label)

    def add_child(self, element):
        element.parent_element = self
        self.child_elements.append(element)
        if self.page is not None:
            self.page._register(element)
        return element

    def __repr__(self):
        return "<%s: %s>" % (self.__class__.__name__.lower(), repr(self.id))


class News(Element):
    """A news entry pointing at a page or an element of a page.

    Fields left as None are filled in by the resolver.
    """

    id_prefix = "news"

    def __init__(
        self,
        id=None,
        domain=None,
        book=None,
        target_page=None,
        element=None,
        title=None,
        view=None,
        description=None,
        pub_date=None,
    ):
        Element.__init__(self, id)
        self.domain = domain
        self.book = book
        self.target_page = target_page
        self.element = element
        self.title = title
        self.view = view
        self.description = description
        self.pub_date = pub_date

    @property
    def label(self):
        return self.title

    def dict(self):
        pub_date = self.pub_date
        if isinstance(pub_date, (datetime.date, datetime.datetime)):
            pub_date = pub_date.isoformat()
        return dict(
            id=self.id,
            domain=self.domain,
            book=self.book,
            target_page=self.target_page,
            element=self.element,
            title=self.title,
            view=self.view,
            description=self.description,
            pub_date=pub_date,
        )


def sort_news(news):
    """Sorts news in feed order: newest first, undated last."""

    def key(n):
        pub_date = n.pub_date
        if isinstance(pub_date, datetime.datetime):
            pub_date = pub_date.date()
        return (pub_date is None, pub_date and -pub_date.toordinal(), n.id or "")

    return sorted(news, key=key)


class Page(Node):
    def __init__(self, page_ref, title=None, capture_level=CaptureLevel.BODY):
        Node.__init__(self)
        self.page_ref = page_ref
        self.title = title
        self.capture_level = capture_level
        # top-level elements, in document order
        self.elements = []
        self.elements_by_id = {}
        self.generated_ids = set()

    def add_element(self, element):
        self._register(element)
        self.elements.append(element)
        return element

    def _register(self, element):
        element.page = self
        if element.id is None:
            element.id = self.generate_id(element)
            self.generated_ids.add(element.id)
        elif element.id in self.elements_by_id:
            raise ConfigurationError(
                "duplicate element id on %s: %s" % (self.page_ref, element.id)
            )
        self.elements_by_id[element.id] = element
        for child in element.child_elements:
            self._register(child)

    def generate_id(self, element):
        """Generates an id from the element label, unique within this page.

        >>> page = Page(PageRef(BookRef(None, "/"), "/index"))
        >>> page.generate_id(Element(label="Getting Started!"))
        'getting-started'
        >>> page.add_element(Element(label="Intro")).id
        'intro'
        >>> page.add_element(Element(label="Intro")).id
        'intro-2'
        >>> page.add_element(News()).id
        'news'
        >>> sorted(page.generated_ids)
        ['intro', 'intro-2', 'news']
        """
        label = element.label or ""
        base = re.sub(r'[^a-z0-9]+', '-', label.lower()).strip('-') or element.id_prefix
        id = base
        i = 2
        while id in self.elements_by_id:
            id = "%s-%d" % (base, i)
            i += 1
        return id

    @property
    def page_links(self):
        """Links of the page itself and of all its elements."""
        links = set(self._page_links)
        for element in self.elements_by_id.values():
            links.update(element.page_links)
        return frozenset(links)

    @property
    def news(self):
        return [e for e in self.elements_by_id.values() if isinstance(e, News)]

    def __repr__(self):
        return "<page: %s>" % repr(str(self.page_ref))

    @classmethod
    def from_data(cls, page_ref, data, capture_level):
        """Builds a page from plain data, as loaded from configuration.

        Elements are only populated from META capture upwards.
        """
        title = data.get('title')
        if not title:
            raise ConfigurationError("page without title: %s" % page_ref)
        page = cls(page_ref, title, capture_level)
        if capture_level >= CaptureLevel.META:
            for d in data.get('elements') or []:
                page.add_element(element_from_data(d))
        return page


def element_from_data(d):
    """
    >>> e = element_from_data({'id': 's1', 'label': 'Section', 'elements': [{'type': 'news', 'title': 'Hi'}]})
    >>> e, e.child_elements[0].title
    (<element: 's1'>, 'Hi')
    """
    if d.get('type') == 'news':
        pub_date = d.get('pub_date')
        if isinstance(pub_date, str):
            try:
                pub_date = datetime.date.fromisoformat(pub_date)
            except ValueError:
                raise ConfigurationError(
                    "malformed pub_date on %s: %s" % (d.get('id'), pub_date)
                )
        element = News(
            id=d.get('id'),
            domain=d.get('domain'),
            book=d.get('book'),
            target_page=d.get('target_page'),
            element=d.get('element'),
            title=d.get('title'),
            view=d.get('view'),
            description=d.get('description'),
            pub_date=pub_date,
        )
    else:
        element = Element(d.get('id'), d.get('label'))

    for child in d.get('elements') or []:
        element.add_child(element_from_data(child))
    return element
