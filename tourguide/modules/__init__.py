"""modules/ — planning, tool adapters, validation and observability."""
