""" Python Packaging information

This file allows the module to be pip-installed into a python kernel.

Project metadata and dependencies are held in pyproject.toml.

To install your working copy into your local environment in "editable mode", with test dependencies:

    pip install -e "/path/to/working/copy[tests]"

"""

from setuptools import setup

setup()
