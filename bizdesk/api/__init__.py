"""HTTP presentation layer: JSON API (v1) and server-rendered pages."""
