"""api/routes/ — one APIRouter per resource."""
