"""Configuration store backends.

`MongoConfigStore` lives in `confquery.stores.mongodb` and requires the
``mongodb`` extra (pymongo); import it from there.
"""

from .memory import InMemoryConfigStore

__all__ = ("InMemoryConfigStore",)
