"""Core algorithms: result caching and candidate scoring."""
