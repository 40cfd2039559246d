"""Infrastructure layer: logging and completion service clients."""
