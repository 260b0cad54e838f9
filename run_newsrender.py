#! /usr/bin/env python
"""Script to run newsrender actions.

USAGE:

* Print the resolved news of page /news in book /docs.

    $ python run_newsrender.py -f news.yaml resolve /docs /news

* Print the news anchors of the same page, with debug logging.

    $ python run_newsrender.py -f news.yaml --debug render /docs /news
"""
import sys

from optparse import OptionParser

import newsrender
from newsrender import config

def parse_args():
    parser = OptionParser(usage="%prog -f config_file [--debug] action [args]", version=newsrender.__version__)

    parser.add_option("-f", dest="config_file", help="config file")
    parser.add_option("--debug", dest="debug", action="store_true", default=False, help="log debug messages")

    options, args = parser.parse_args()

    if options.config_file is None:
        parser.error("Missing config file")
    return options, args

def main():
    options, args = parse_args()
    newsrender.load_config(options.config_file)
    if options.debug:
        config.debug = True
    sys.exit(newsrender.run(args))

if __name__ == "__main__":
    main()
