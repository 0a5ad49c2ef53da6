"""Infrastructure adapters shared by feature slices."""
