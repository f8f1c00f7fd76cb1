"""stores/ — stateful orchestration components owned by the app."""
