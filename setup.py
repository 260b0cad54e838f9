#!/usr/bin/env python

from setuptools import find_packages, setup

setup(
    name='newsrender',
    version="0.1dev",
    description='newsrender: SemanticCMS news elements rendered as html',
    packages=find_packages(exclude=["ez_setup"]),
    py_modules=['run_newsrender'],
    install_requires=[
        'web.py',
        'simplejson',
        'PyYAML',
        'legacy-cgi; python_version >= "3.13"',
    ],
    extras_require={
        'test': ['pytest'],
    },
    classifiers=[
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: Implementation :: CPython',
    ],
    license="LGPLv3",
    platforms=["any"],
)
