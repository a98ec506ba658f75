"""L4 Execution — running install strategies."""
