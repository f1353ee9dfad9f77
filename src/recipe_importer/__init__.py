"""Recipe Import Service.

Imports recipes from arbitrary web pages through a cascade of extraction
strategies and normalizes them into one strict recipe schema.
"""

__version__ = "0.1.0"
