"""
catalog/models.py -- Domain dataclass for catalog entries.

Pure data container with zero logic. Uniqueness rules and the seed data live
in catalog/store.py.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Product:
    """A catalog entry.

    price is kept exactly as submitted (int or float); records are stored
    verbatim and never normalised.
    """

    id: int
    name: str
    category: str
    price: int | float
    in_stock: bool
