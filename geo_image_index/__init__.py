"""
Geo Image Index - A Python tool for building a map-ready index of geotagged images.

This package provides functionality to:
- Walk a directory tree and read GPS coordinates from image metadata
- Write a resized thumbnail for every geotagged image
- Export all indexed images as a GeoJSON feature collection
"""

__version__ = "1.0.0"
__author__ = "stbrie"

from .main import main

__all__ = ["main"]
