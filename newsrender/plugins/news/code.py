"""
news: render news elements as html

Resolves the target of every news element while its page is captured and
writes an empty anchor at its position in the page body, so links to the
news entry work.
"""
import io
import logging

import web

from newsrender import config, resolver
from newsrender.cms import SemanticCMS
from newsrender.core.model import CaptureLevel
from newsrender.utils import pageindex
from newsrender.utils.context import context

logger = logging.getLogger("newsrender.plugins.news")

toc_writers = []


def register_toc_writer(f):
    """Registers f(out, page) to write the table of contents of a page.

    It is called before every news anchor and must write the table of
    contents at most once per page.
    """
    toc_writers.append(f)
    return f


_cms = None


def get_cms():
    global _cms
    if _cms is None:
        _cms = SemanticCMS.from_config()
    return _cms


def do_body(news, cms=None):
    """Resolves news while capturing at META level or higher.

    Returns the ResolvedTarget, or None when nothing was done.
    """
    if context.capture_level < CaptureLevel.META:
        return None
    assert context.current_node is news
    return resolver.resolve(news, context.current_page, cms or get_cms())


def write_news(out, news, page_index=None):
    page = news.page
    for f in toc_writers:
        f(out, page)

    ref_id = pageindex.get_ref_id_in_page(page_index, page, news.id)
    out.write(
        '<div class="%s" id="%s"></div>'
        % (web.websafe(config.anchor_class), web.websafe(ref_id))
    )


def render_news(out, news, cms=None, page_index=None):
    do_body(news, cms)
    if context.capture_level == CaptureLevel.BODY:
        write_news(out, news, page_index or context.page_index)


def render_page(page_ref, cms=None, capture_level=CaptureLevel.BODY, page_index=None):
    """Captures a page and runs all of its news elements through the render pass.

    Returns the page and the html written for it.
    """
    cms = cms or get_cms()
    page = cms.capture_page(page_ref, capture_level)
    out = io.StringIO()

    context.load(current_page=page, capture_level=capture_level, page_index=page_index)
    try:
        for news in page.news:
            context.current_node = news
            render_news(out, news, cms, page_index)
    finally:
        # end of the request
        cms.clear_cache()
        context.clear()

    logger.debug("rendered %d news on %s", len(page.news), page_ref)
    return page, out.getvalue()
