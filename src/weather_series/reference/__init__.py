"""Static reference data: cities, metric catalog, option labels."""
