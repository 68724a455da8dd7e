"""Command-line interface for storecast."""
