"""Search index extraction for generated documentation sites."""
