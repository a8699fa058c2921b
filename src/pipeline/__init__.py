"""Schema bootstrap and report generation."""
