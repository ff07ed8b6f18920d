"""Common literal values used across course_pages.

These constants keep filenames centralized so the builder, the index merger,
the CLI and the tests import the same values without drifting. Intended for
internal use within the course_pages package.

Examples
--------
>>> from course_pages import _constants
>>> _constants.HOMEPAGE_FILENAME
'homepage.html'
>>> _constants.ARTICLES_INDEX_FILENAME.endswith('.json')
True
"""

DEFAULT_CONFIG_FILENAME = "build-config.yaml"
ARTICLES_INDEX_FILENAME = "articles.json"
HOMEPAGE_FILENAME = "homepage.html"
