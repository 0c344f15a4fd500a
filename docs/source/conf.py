import datetime

import consoler

# -- Project information -----------------------------------------------------

project = "Consoler"
copyright = f"{datetime.date.today().year}, Consoler authors"
author = "Consoler authors"
release = version = consoler.__version__


# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.intersphinx",
    "sphinx.ext.githubpages",
]

intersphinx_mapping = {
    "python": ("https://docs.python.org/3/", None),
}
nitpick_ignore_regex = [(r"py:class", r"(.*\.)?([A-Z]{1,2}|_[^.]*)")]
autodoc_typehints_format = "short"
autodoc_member_order = "bysource"

# -- Options for HTML output -------------------------------------------------

html_theme = "furo"
