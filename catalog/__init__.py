"""catalog/ -- In-memory product catalog for StockRoom.

Layer rule: catalog/ imports only stdlib and core/. It does NOT import from
api/ or auth/.
"""
