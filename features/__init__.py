"""Feature packages: one per API surface (generation, history, profiles, voices, admin)."""
