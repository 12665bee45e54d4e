"""Project activity tracker: per-file edit statistics over a work session"""

__version__ = "0.3.0"
