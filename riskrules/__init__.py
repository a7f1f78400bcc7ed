"""Risk Rules: security risk analysis and custom rule evaluation service."""
