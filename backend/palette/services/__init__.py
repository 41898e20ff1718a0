"""
Palette Backend: Services Layer
================================

Service Inventory:
    - transform:     pure hex → RGB/HSV/luma pipeline (no I/O, no settings)
    - ColorService:  queries, inserts, and the transformed listing
"""
