from bizdash.store.base import ProfileLoadError, ProfileStore
from bizdash.store.factory import build_store
from bizdash.store.memory import InMemoryProfileStore, load_store_file
from bizdash.store.rest import RestProfileStore

__all__ = [
    "InMemoryProfileStore",
    "ProfileLoadError",
    "ProfileStore",
    "RestProfileStore",
    "build_store",
    "load_store_file",
]
