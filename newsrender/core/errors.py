"""Errors raised while resolving and rendering news.

All of them are fatal to the render of the current page. They carry a status
so the host can turn them into an error page.
"""
import simplejson


class NewsException(Exception):
    status = "500 Internal Server Error"

    def __init__(self, **kw):
        self.status = kw.pop('status', self.status)
        kw.setdefault('error', 'unknown')
        self.d = kw
        Exception.__init__(self)

    def __str__(self):
        return simplejson.dumps(self.d)

    def dict(self):
        return dict(self.d)

    @property
    def message(self):
        return self.d.get('message')


class ConfigurationError(NewsException):
    """Malformed reference or configuration, usually a content authoring mistake.

    >>> e = ConfigurationError("book required when domain provided.")
    >>> e.status
    '400 Bad Request'
    >>> str(e)
    '{"error": "bad_config", "message": "book required when domain provided."}'
    """

    status = "400 Bad Request"

    def __init__(self, message, **kw):
        NewsException.__init__(self, error='bad_config', message=message, **kw)


class BadReference(NewsException):
    """The target element can not be linked to on an otherwise valid page."""

    status = "404 Not Found"

    def __init__(self, message, **kw):
        NewsException.__init__(self, error='bad_reference', message=message, **kw)


class PageNotFound(NewsException):
    status = "404 Not Found"

    def __init__(self, page_ref, **kw):
        NewsException.__init__(
            self, error='page_notfound', message="Page not found: %s" % page_ref, **kw
        )


class UnsupportedOperation(NewsException):
    status = "501 Not Implemented"

    def __init__(self, message, **kw):
        NewsException.__init__(self, error='not_implemented', message=message, **kw)


class InvariantViolation(NewsException):
    def __init__(self, message, **kw):
        NewsException.__init__(self, error='invariant', message=message, **kw)
