"""modules/planning/ — candidate filtering, route planning and tour assembly."""
