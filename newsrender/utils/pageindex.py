"""Index of pages combined into a single document.

When several pages are rendered together their element ids may collide, so
ids are prefixed with the position of their page in the index.
"""


class PageIndex:
    """
    >>> from newsrender.core.model import BookRef, PageRef, Page
    >>> a = PageRef(BookRef(None, "/"), "/a")
    >>> b = PageRef(BookRef(None, "/"), "/b")
    >>> index = PageIndex([a, b])
    >>> index.get_page_index(b)
    1
    >>> index.get_ref_id_in_page(Page(b), "news-1")
    'page1-news-1'
    >>> PageIndex.get_ref_id(None, "news-1")
    'news-1'
    """

    def __init__(self, page_refs):
        self.page_refs = list(page_refs)
        self._indexes = dict((ref, i) for i, ref in enumerate(self.page_refs))

    def get_page_index(self, page_ref):
        return self._indexes.get(page_ref)

    @staticmethod
    def get_ref_id(index, id):
        if index is None:
            return id
        return "page%d-%s" % (index, id)

    def get_ref_id_in_page(self, page, id):
        return self.get_ref_id(self.get_page_index(page.page_ref), id)


def get_ref_id_in_page(page_index, page, id):
    """Ref id of an element, for use when there may be no page index."""
    if page_index is None:
        return id
    return page_index.get_ref_id_in_page(page, id)
