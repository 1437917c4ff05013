"""
Package entry point.

Allows running all scrapers via:

    python -m duscraper

This simply forwards execution to duscraper.cli.main().
"""

from duscraper.cli import main

if __name__ == "__main__":
    main()
