from servicebind._internal.meta import DEFAULT_TAG, MetaStore, default_meta_store

__all__ = ["DEFAULT_TAG", "MetaStore", "default_meta_store"]
