"""Desktop simulator for running the engine without a phone."""
