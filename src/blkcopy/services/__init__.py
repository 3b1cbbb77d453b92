"""Service layer: copy orchestration returning ServiceResult.

Services may import from domain, pipeline, infrastructure, and config models.
They must never import from commands or output.
"""
