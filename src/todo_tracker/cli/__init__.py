"""Entry point, composition root and menu handlers."""
