"""Business logic for the interaction service (skill catalog and orchestration)."""
