"""Ambient services for the accessibility engine: config, logging, results."""
