"""Scrape the OKO.press API once and serve it as an RSS feed for a bounded time."""

__version__ = "0.1.0"
