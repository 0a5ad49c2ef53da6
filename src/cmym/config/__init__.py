"""Configuration package for CMYM."""
