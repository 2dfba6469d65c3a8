"""Backend connections for the repository and the search index."""
