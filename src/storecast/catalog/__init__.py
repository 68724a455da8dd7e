"""Clip catalog parsing: the input side of the scheduler."""

from storecast.catalog.clip_catalog import ClipDescriptor, load_catalog, parse_catalog

__all__ = ["ClipDescriptor", "load_catalog", "parse_catalog"]
