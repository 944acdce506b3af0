"""API schemas (pydantic): request payloads, projections and responses."""
