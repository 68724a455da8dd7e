"""storecast - broadcast-day playlist scheduling for in-store audio."""

__version__ = "0.1.0"
