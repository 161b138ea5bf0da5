"""Principal resolution adapters."""
