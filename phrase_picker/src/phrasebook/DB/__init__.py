from .api import KeyValueStore, make_store, load_list, save_list

__all__ = ["KeyValueStore", "make_store", "load_list", "save_list"]
