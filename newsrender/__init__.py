"""newsrender: SemanticCMS news elements rendered as html"""
import logging
import sys

import simplejson
import web

from newsrender import config

__version__ = "0.1dev"


usage = """
newsrender

list of commands:

resolve BOOK PATH   print the resolved news of a page as JSON
render BOOK PATH    print the news anchors of a page
help                show this
"""

_actions = []
def action(f):
    """Decorator to register a newsrender action."""
    _actions.append(f)
    return f

def find_action(name):
    for a in _actions:
        if a.__name__ == name:
            return a

def _page_ref(book, path):
    from newsrender.cms import parse_book_ref, resolve_path
    from newsrender.core.model import PageRef

    return PageRef(parse_book_ref(book), resolve_path("/", path))

@action
def resolve(book, path):
    """Print the resolved news of a page as JSON."""
    from newsrender.core.model import CaptureLevel, sort_news
    from newsrender.plugins.news import code

    page, _ = code.render_page(_page_ref(book, path), capture_level=CaptureLevel.META)
    print(simplejson.dumps([n.dict() for n in sort_news(page.news)], indent=4))

@action
def render(book, path):
    """Print the news anchors of a page."""
    from newsrender.plugins.news import code

    _, html = code.render_page(_page_ref(book, path))
    print(html)

@action
def help(name=None):
    """Show this help."""

    a = name and find_action(name)

    print("newsrender Help")
    print("")

    if a:
        print("    %s\t%s" % (a.__name__, a.__doc__))
    else:
        print("Available actions")
        for a in _actions:
            print("    %s\t%s" % (a.__name__, a.__doc__))

def run_action(name, args=()):
    from newsrender.core.errors import NewsException

    a = find_action(name)
    if a is None:
        print('unknown command', name, file=sys.stderr)
        help()
        return 2

    try:
        a(*args)
    except NewsException as e:
        print(e, file=sys.stderr)
        return 1
    return 0

def run(args=None):
    if args is None:
        args = sys.argv[1:]

    if config.get("debug"):
        logging.basicConfig(level=logging.DEBUG)

    if len(args) == 0:
        return run_action("help")
    else:
        return run_action(args[0], args[1:])

def storify(d):
    """Recursively converts dict to web.storage object.

    >>> d = storify({'x': 1, 'y': {'z': 2}})
    >>> d.x
    1
    >>> d.y.z
    2
    """
    if isinstance(d, dict):
        return web.storage((k, storify(v)) for k, v in d.items())
    elif isinstance(d, list):
        return [storify(x) for x in d]
    else:
        return d

def load_config(config_file):
    import yaml

    with open(config_file) as f:
        runtime_config = yaml.safe_load(f) or {}

    for k, v in runtime_config.items():
        setattr(config, k, storify(v))

def main(config_file, *args):
    """Run newsrender using config file."""
    load_config(config_file)
    return run(list(args))
