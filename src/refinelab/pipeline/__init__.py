"""AI feedback agents (analysis, comparison, fingerprint)."""
