# Configuration file for the Sphinx documentation builder.
#
# Options reference:
# https://www.sphinx-doc.org/en/master/usage/configuration.html


# -- Path setup --------------------------------------------------------------

# The halfmesh package lives two levels above this directory.

import os
import sys

sys.path.insert(0, os.path.abspath('../../.'))


# -- Project information -----------------------------------------------------

project = 'halfmesh'
copyright = '2024, m3shware'
author = 'm3shware'

release = '1.0'


# -- General configuration ---------------------------------------------------

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.intersphinx',
    'sphinx.ext.mathjax',
    'sphinx.ext.napoleon',
    'sphinx.ext.autosummary',
    'sphinx.ext.viewcode',
]

# Link to the python and numpy documentation.
intersphinx_mapping = {
    'python': ('https://docs.python.org/3', None),
    'numpy': ('https://numpy.org/doc/stable', None),
}

autosummary_generate = True
autosummary_generate_overwrite = True

templates_path = ['_templates']
exclude_patterns = []

toc_object_entries = False


# -- Options for AutoDoc output -------------------------------------------

# Records are documented in the order they appear in hds.py.
autodoc_member_order = 'bysource'


def skip(app, what, name, obj, skip, options):
    if name in ('__init__', '__new__'):
        return True

    return None


def setup(app):
    app.connect('autodoc-skip-member', skip)


# -- Options for HTML output -------------------------------------------------

html_theme = 'sphinx_rtd_theme'
html_static_path = []
html_show_sourcelink = True
