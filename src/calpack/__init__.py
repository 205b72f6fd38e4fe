"""calpack: pack calendar times of custom calendars into dense integer indices."""

__version__ = "0.1.0"
