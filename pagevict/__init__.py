"""Page eviction policies: LRU and LRU-K frame replacers, with their errors and clock."""

__version__ = "0.3.1"