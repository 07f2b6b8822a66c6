"""Ports for external collaborators."""

from .image_store import IImageStore
from .page_invalidator import IPageInvalidator
from .response_cache import IResponseCache
from .view_counter import IViewCounter

__all__ = ["IImageStore", "IPageInvalidator", "IResponseCache", "IViewCounter"]
