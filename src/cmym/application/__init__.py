"""Application layer: services wiring features into runnable workflows."""
