"""Infrastructure — database session manager, logging, credential primitives."""
