"""Keep Postman collections and environments in sync with local files."""

__version__ = "0.1.0"
