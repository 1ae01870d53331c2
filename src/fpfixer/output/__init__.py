"""Output layer: formats ServiceResult for humans or machines."""
