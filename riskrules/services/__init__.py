"""Domain services: scoring, benchmarking and rule evaluation."""
