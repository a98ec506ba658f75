"""L0 Data — requirements and install strategies."""
