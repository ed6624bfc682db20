"""Pure calculation engine, one module per network technology.

The modules are independent of each other and hold no mutable state.
Degenerate inputs produce IEEE-754 special values (``inf``/``nan``) rather
than exceptions; callers are expected to check for them.
"""
from . import gsm, hertzian, optical, umts

__all__ = ["gsm", "umts", "hertzian", "optical"]
