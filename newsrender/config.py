"""
newsrender configuration.
"""


def get(name, default=None):
    return globals().get(name, default)


debug = False

# domain assumed for books referenced without one
default_domain = "localhost"

# books available in this deployment, keyed by book path.
# each book is a dict with a `pages` dict mapping page path to page data.
books: dict[str, dict] = {}

# books referenced by content but not available in this deployment.
# links into these books render as broken paths instead of failing.
missing_books: list[str] = []

anchor_class = "semanticcms-news-anchor"
