"""Resolves the target of a news element.

A news element names its target with any of domain, book, page and element.
Whatever was left out is filled in from the page being rendered, and the
title is taken from the target when not given explicitly. The news element is
written back fully resolved so views on other pages can use it directly.
"""
import collections
import logging

from newsrender.core.errors import (
    BadReference,
    ConfigurationError,
    InvariantViolation,
    UnsupportedOperation,
)
from newsrender.core.model import CaptureLevel

logger = logging.getLogger("newsrender.resolver")


class ResolvedTarget(
    collections.namedtuple(
        "ResolvedTarget", ["domain", "book", "target_page", "element", "title"]
    )
):
    """Fully resolved reference fields of a news element."""

    __slots__ = ()

    def apply(self, news):
        news.domain = self.domain
        news.book = self.book
        news.target_page = self.target_page
        news.element = self.element
        news.title = self.title


def get_target_page_ref(news, current_page, cms):
    if news.domain is not None and news.book is None:
        raise ConfigurationError("book required when domain provided.")

    if news.book is None:
        if news.target_page is None:
            return current_page.page_ref
        return cms.get_page_ref(None, None, news.target_page, current_page)
    else:
        if news.target_page is None:
            raise ConfigurationError("page required when book provided.")
        return cms.get_page_ref(news.domain, news.book, news.target_page, current_page)


def find_target_page(element, current_page, target_page_ref, cms):
    """Returns the target page, or None when it is in a missing book."""
    target_book_ref = target_page_ref.book_ref
    current_page_ref = current_page.page_ref

    if not cms.get_book(target_book_ref).is_accessible():
        logger.debug("%s is in missing book %s", target_page_ref, target_book_ref)
        return None

    # elements above this one on the current page are already captured
    if target_page_ref == current_page_ref and (
        element is None or element in current_page.elements_by_id
    ):
        return current_page

    # capturing the current page again would recurse without end
    if target_page_ref == current_page_ref:
        raise UnsupportedOperation(
            "Forward reference to element in same page not supported yet: %s" % element
        )

    capture_level = CaptureLevel.PAGE if element is None else CaptureLevel.META
    return cms.capture_page(target_page_ref, capture_level)


def find_target_element(news, element, target_page):
    """Returns (target_element, element_id). Both may be None."""
    if element is None:
        if news.book is None and news.target_page is None:
            # a bare news element points at the element it is in
            parent = news.parent_element
            if parent is not None:
                return parent, parent.id
        return None, None

    if target_page is None:
        return None, element

    target_element = target_page.elements_by_id.get(element)
    if target_element is None:
        raise BadReference("Element not found in target page: %s" % element)
    if element in target_page.generated_ids:
        raise BadReference(
            "Not allowed to link to a generated element id, set an explicit id on the target element: %s"
            % element
        )
    return target_element, element


def find_title(element, target_element, target_page, target_page_ref, cms):
    if element is not None:
        if target_element is None:
            # element in missing book
            return cms.get_broken_path(target_page_ref, element)
        title = target_element.label
        if not title:
            raise InvariantViolation("No label from target element: %r" % target_element)
        return title
    elif target_page is None:
        # page in missing book
        return cms.get_broken_path(target_page_ref)
    else:
        return target_page.title


def resolve(news, current_page, cms):
    """Resolves the target of news and writes the result back to it.

    Returns the ResolvedTarget. A page link to the target is recorded on news
    even when the target is in a missing book.
    """
    if current_page is None:
        raise ConfigurationError("news must be nested within a page")

    target_page_ref = get_target_page_ref(news, current_page, cms)
    news.add_page_link(target_page_ref)

    element = news.element
    title = news.title
    if element is None or title is None:
        target_page = find_target_page(element, current_page, target_page_ref, cms)
        target_element, element = find_target_element(news, element, target_page)
        if title is None:
            title = find_title(element, target_element, target_page, target_page_ref, cms)

    book_ref = target_page_ref.book_ref
    resolved = ResolvedTarget(
        domain=book_ref.domain,
        book=book_ref.path,
        target_page=target_page_ref.path,
        element=element,
        title=title,
    )
    logger.debug("resolved %r on %s: %s", news, current_page.page_ref, resolved)
    resolved.apply(news)
    return resolved
