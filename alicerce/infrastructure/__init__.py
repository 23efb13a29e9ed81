"""Infrastructure layer: adapters, observability, metrics and stubs."""
