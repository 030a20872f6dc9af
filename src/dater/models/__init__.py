"""Point-in-time values and formatter configuration."""
