"""L5 Orchestration — the ensure() coordinator."""
