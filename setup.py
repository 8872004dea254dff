#!/usr/bin/env python3
"""
Setup script for basicyaml.

basicyaml is pure Python and has no runtime dependencies; pytest is only
needed to run the test suite (pip install -e .[test]).
"""

import os
import re
from setuptools import setup


def get_version():
    """Read __version__ from the package without importing it."""
    here = os.path.dirname(os.path.abspath(__file__))
    with open(os.path.join(here, 'basicyaml', '__init__.py')) as f:
        match = re.search(r'^__version__ = "([^"]+)"', f.read(), re.M)
    return match.group(1)


setup(
    name='basicyaml',
    version=get_version(),
    description='Strict YAML subset parser for configuration files',
    packages=['basicyaml'],
    package_data={'basicyaml': ['__init__.pyi']},
    python_requires='>=3.8',
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['basicyaml=basicyaml.__main__:main'],
    },
)
