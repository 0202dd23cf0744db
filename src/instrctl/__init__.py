"""instrctl — front-matter hygiene for instruction documents."""

__version__ = "0.1.0"
