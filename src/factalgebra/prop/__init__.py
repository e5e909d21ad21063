"""Property check configuration."""
