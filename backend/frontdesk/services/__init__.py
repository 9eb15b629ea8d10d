"""Service layer: billing arithmetic and persistence helpers."""
