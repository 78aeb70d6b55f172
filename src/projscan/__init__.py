"""projscan: detect changes in project category folders and process them."""

__version__ = "0.1.0"
