"""Output layer: rendering ServiceResult for humans (Rich) or machines (JSON)."""
