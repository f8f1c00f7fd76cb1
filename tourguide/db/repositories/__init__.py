"""db/repositories/ — persistence adapters."""
