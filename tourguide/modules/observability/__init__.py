"""modules/observability/ — structured event logging."""
