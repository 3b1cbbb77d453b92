"""Domain layer: error taxonomy, transform names, and text rules.

This layer depends only on stdlib.
It must never import from pipeline, services, infrastructure, commands, or config.
"""
