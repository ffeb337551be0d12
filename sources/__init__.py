# Importing the strategy modules registers them
from . import firecrawl_search  # noqa: F401
from . import pagesjaunes_directory  # noqa: F401
