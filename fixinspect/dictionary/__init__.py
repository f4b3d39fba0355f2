"""FIX protocol dictionary lookups and XML loading."""

from fixinspect.dictionary.loader import (
    DEFAULT_DICTIONARY_PATH,
    clear_dictionary_cache,
    get_dictionary,
    load_dictionary,
    load_dictionary_from_string,
)
from fixinspect.dictionary.provider import DictionaryProvider, FixDictionary

__all__ = [
    "DEFAULT_DICTIONARY_PATH",
    "DictionaryProvider",
    "FixDictionary",
    "clear_dictionary_cache",
    "get_dictionary",
    "load_dictionary",
    "load_dictionary_from_string",
]
