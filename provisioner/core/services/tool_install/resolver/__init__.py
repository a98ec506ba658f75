"""L2 Resolver — pure decisions over requirements and host profiles."""
