from .image_store import CdnImageStore, DisabledImageStore

__all__ = ["CdnImageStore", "DisabledImageStore"]
