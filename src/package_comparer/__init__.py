"""Package Comparer - Detect breaking changes between two package snapshots."""

import logging

__version__ = "0.1.0"
__author__ = "Package Comparer Team"
__license__ = "Apache-2.0"

# Suppress verbose third-party library logging
logging.getLogger("markdown_it").setLevel(logging.WARNING)
