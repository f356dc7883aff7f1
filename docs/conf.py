from __future__ import annotations

# -- Project information -----------------------------------------------------
import importlib.metadata

metadata = importlib.metadata.metadata("datetz")

project = metadata["Name"]
version = metadata["Version"]
release = metadata["Version"]


# -- General configuration ------------------------------------------------

nitpicky = True
# Literal and Union aliases have no documentation page of their own
nitpick_ignore = [
    ("py:class", "DateTzLike"),
    ("py:class", "Disambiguate"),
    ("py:class", "Inclusivity"),
    ("py:class", "Millis"),
    ("py:class", "Unit"),
]
autodoc_type_aliases = {
    name: name
    for name in ("DateTzLike", "Disambiguate", "Inclusivity", "Millis", "Unit")
}
extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.doctest",
    "sphinx.ext.intersphinx",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "sphinx_copybutton",
    "myst_parser",
]
source_suffix = {
    ".md": "markdown",
    ".rst": "restructuredtext",
}

master_doc = "index"
exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]
myst_heading_anchors = 2
doctest_global_setup = "from datetz import DateTz"

# -- Options for HTML output ----------------------------------------------

autodoc_member_order = "bysource"
html_theme = "furo"
highlight_language = "python3"
pygments_style = "default"
pygments_dark_style = "lightbulb"
intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "babel": ("https://babel.pocoo.org/en/latest/", None),
}
toc_object_entries_show_parents = "hide"
