"""Infrastructure layer: source and sink handles.

This layer depends only on stdlib and domain.
It must never import from pipeline, services, commands, or output.
"""
