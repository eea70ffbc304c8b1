"""Configuration, errors and HTTP plumbing."""
