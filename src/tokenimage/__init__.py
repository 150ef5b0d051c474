"""TokenImage - token icons by ticker symbol, cached in Redis."""

__version__ = "0.1.0"
