"""
duscraper: one-shot scrapers for three University of Denver pages.

- bulletin  -> results/bulletin.json
- athletics -> results/athletic_events.json
- calendar  -> results/calendar_events.json
"""

__version__ = "0.1.0"
