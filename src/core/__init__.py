"""
Core functionality for Resilient Fetch.

Shared infrastructure (logging) used by the request modules and the CLI.
"""

__version__ = "1.0.0"
