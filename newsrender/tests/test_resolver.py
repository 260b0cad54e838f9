import pytest

from newsrender import resolver
from newsrender.core import errors
from newsrender.core.model import CaptureLevel, Element, News
from newsrender.tests.utils import FakeCMS, make_page, page_ref, section


def test_no_current_page():
    with pytest.raises(errors.ConfigurationError) as e:
        resolver.resolve(News(), None, FakeCMS())
    assert e.value.message == "news must be nested within a page"


def test_domain_without_book():
    page = make_page("/", "/index", "Home")
    n = page.add_element(News(domain="example.com", target_page="/x"))

    with pytest.raises(errors.ConfigurationError) as e:
        resolver.resolve(n, page, FakeCMS([page]))
    assert e.value.message == "book required when domain provided."
    assert e.value.status == "400 Bad Request"


def test_book_without_page():
    page = make_page("/", "/index", "Home")
    n = page.add_element(News(book="/docs"))

    with pytest.raises(errors.ConfigurationError) as e:
        resolver.resolve(n, page, FakeCMS([page]))
    assert e.value.message == "page required when book provided."


def test_current_page():
    page = make_page("/", "/index", "Home")
    n = page.add_element(News())
    cms = FakeCMS([page])

    resolved = resolver.resolve(n, page, cms)

    assert resolved == ("localhost", "/", "/index", None, "Home")
    assert (n.domain, n.book, n.target_page, n.element, n.title) == resolved
    assert cms.captures == []


def test_other_book_element():
    target = make_page("/docs", "/x", "X", [Element("sec1", "Section One")])
    page = make_page("/", "/index", "Home")
    n = page.add_element(News(book="docs", target_page="/x", element="sec1"))
    cms = FakeCMS([page, target])

    resolver.resolve(n, page, cms)

    assert n.title == "Section One"
    assert n.domain == "localhost"
    assert n.book == "/docs"
    assert n.target_page == "/x"
    assert n.element == "sec1"
    assert cms.captures == [(target.page_ref, CaptureLevel.META)]


def test_other_page_title():
    target = make_page("/", "/about", "About us")
    page = make_page("/", "/index", "Home")
    n = page.add_element(News(target_page="about"))
    cms = FakeCMS([page, target])

    resolver.resolve(n, page, cms)

    assert n.title == "About us"
    assert n.target_page == "/about"
    assert n.element is None
    assert cms.captures == [(target.page_ref, CaptureLevel.PAGE)]


def test_relative_target_page():
    target = make_page("/", "/a/c", "C")
    page = make_page("/", "/a/b", "B")
    n = page.add_element(News(target_page="c"))

    resolver.resolve(n, page, FakeCMS([page, target]))
    assert n.target_page == "/a/c"
    assert n.title == "C"


def test_explicit_element_and_title():
    page = make_page("/", "/index", "Home")
    n = page.add_element(
        News(book="docs", target_page="/x", element="sec1", title="Read this")
    )
    cms = FakeCMS([page])

    resolver.resolve(n, page, cms)

    # no capture and no book lookup needed
    assert cms.captures == []
    assert n.title == "Read this"
    assert n.element == "sec1"
    assert (n.domain, n.book, n.target_page) == ("localhost", "/docs", "/x")
    assert n.page_links == {page_ref("/docs", "/x")}


def test_defaults_to_parent_element():
    n = News()
    page = make_page("/", "/index", "Home", [section("s1", "Section One", n)])
    cms = FakeCMS([page])

    resolver.resolve(n, page, cms)

    assert n.element == "s1"
    assert n.title == "Section One"
    assert n.target_page == "/index"
    assert cms.captures == []


def test_parent_element_keeps_explicit_title():
    n = News(title="Custom")
    page = make_page("/", "/index", "Home", [section("s1", "Section One", n)])

    resolver.resolve(n, page, FakeCMS([page]))
    assert n.element == "s1"
    assert n.title == "Custom"


def test_no_parent_default_when_page_given():
    n = News(target_page="/index")
    page = make_page("/", "/index", "Home", [section("s1", "Section One", n)])

    resolver.resolve(n, page, FakeCMS([page]))
    assert n.element is None
    assert n.title == "Home"


def test_missing_book():
    page = make_page("/", "/index", "Home")
    n = page.add_element(News(book="/gone", target_page="/x"))
    cms = FakeCMS([page], missing_books=["/gone"])

    resolver.resolve(n, page, cms)

    assert n.title == "¿localhost:/gone/x?"
    assert n.element is None
    assert cms.captures == []
    assert page.page_links == {page_ref("/gone", "/x")}


def test_missing_book_element():
    page = make_page("/", "/index", "Home")
    n = page.add_element(News(book="/gone", target_page="/x", element="e1"))

    resolver.resolve(n, page, FakeCMS([page], missing_books=["/gone"]))
    assert n.title == "¿localhost:/gone/x#e1?"
    assert n.element == "e1"


def test_element_not_found():
    target = make_page("/docs", "/x", "X", [Element("sec1", "Section One")])
    page = make_page("/", "/index", "Home")
    n = page.add_element(News(book="/docs", target_page="/x", element="sec2"))

    with pytest.raises(errors.BadReference) as e:
        resolver.resolve(n, page, FakeCMS([page, target]))
    assert e.value.message == "Element not found in target page: sec2"
    # the link is recorded before failing
    assert n.page_links == {target.page_ref}


def test_generated_id():
    target = make_page("/docs", "/x", "X", [Element(None, "Intro")])
    assert "intro" in target.elements_by_id

    page = make_page("/", "/index", "Home")
    n = page.add_element(News(book="/docs", target_page="/x", element="intro"))

    with pytest.raises(errors.BadReference) as e:
        resolver.resolve(n, page, FakeCMS([page, target]))
    assert "generated element id" in e.value.message


def test_element_on_current_page():
    page = make_page("/", "/index", "Home", [Element("top", "Top")])
    n = page.add_element(News(element="top"))
    cms = FakeCMS([page])

    resolver.resolve(n, page, cms)
    assert n.title == "Top"
    assert cms.captures == []


def test_forward_reference_to_current_page():
    page = make_page("/", "/index", "Home")
    n = page.add_element(News(element="later"))
    cms = FakeCMS([page])

    with pytest.raises(errors.UnsupportedOperation) as e:
        resolver.resolve(n, page, cms)
    assert e.value.status == "501 Not Implemented"
    assert cms.captures == []


def test_element_without_label():
    target = make_page("/docs", "/x", "X", [Element("blank", "")])
    page = make_page("/", "/index", "Home")
    n = page.add_element(News(book="/docs", target_page="/x", element="blank"))

    with pytest.raises(errors.InvariantViolation):
        resolver.resolve(n, page, FakeCMS([page, target]))


def test_page_link_recorded_once():
    target = make_page("/", "/about", "About")
    page = make_page("/", "/index", "Home")
    n = page.add_element(News(target_page="/about"))
    cms = FakeCMS([page, target])

    resolver.resolve(n, page, cms)
    resolver.resolve(n, page, cms)

    assert n.page_links == {target.page_ref}
    assert page.page_links == {target.page_ref}


def test_resolved_target_apply():
    n = News()
    resolver.ResolvedTarget("example.com", "/docs", "/x", "e1", "T").apply(n)
    assert n.dict()["domain"] == "example.com"
    assert (n.book, n.target_page, n.element, n.title) == ("/docs", "/x", "e1", "T")
