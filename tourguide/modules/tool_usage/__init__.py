"""modules/tool_usage/ — distance maths and external service adapters."""
