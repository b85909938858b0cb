"""Chirp Stage: feed visibility, cursor pagination and pending-post backend."""
