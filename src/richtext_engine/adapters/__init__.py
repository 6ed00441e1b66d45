"""Host surface adapters."""
