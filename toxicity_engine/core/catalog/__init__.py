"""Reference catalog: PRO-CTCAE items, drug modules and regimen definitions."""

from .store import ReferenceCatalog

__all__ = ["ReferenceCatalog"]
