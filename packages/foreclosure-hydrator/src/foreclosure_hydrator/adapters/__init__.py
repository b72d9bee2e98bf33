"""Court adapters for the foreclosure lead pipeline."""
