"""External client factories."""
