"""Constants, errors and logging shared across the package."""
