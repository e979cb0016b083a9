"""
Canvas feature - route modules.

Business capability oriented grouping:
- canvas layout (read-only projections and the rendered timeline SVG)
- canvas sessions (server-held interactive canvases driven by events)
"""
