"""Application configuration: settings and logging."""
