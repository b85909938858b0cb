"""Core configuration, security helpers and domain errors."""
