"""Display helpers for condition states and policy decisions."""
