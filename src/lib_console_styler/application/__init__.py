"""Application layer: ports and use cases orchestrating the logging pipeline."""
