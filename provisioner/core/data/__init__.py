"""Static catalogs — the question registry."""
