"""Configuration for Resilient Fetch."""
