"""
Palette Backend: API Routes Package
====================================

Route Inventory:
    - colors.py:  GET /, /colors, /colorid, /color, /colorname; POST /addcolor
    - health.py:  GET /health

Routes stay thin: read the request, call ColorService, return a schema.
"""
