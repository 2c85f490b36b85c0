"""Recipe CRUD backend with bulk loading from an external recipe API."""

__version__ = "0.1.0"
