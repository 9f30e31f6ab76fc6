"""Headless quarter flow, storage boundary and CLI on top of core."""
