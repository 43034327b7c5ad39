"""Adapters – framework bindings for the health subsystem."""
