from .index import DictionaryIndex, DictionaryEntry, IndexSnapshot
from .validator import validate_wordlist, pretty_summary
from .io import read_lines, write_lines, default_wordlist_path

__all__ = ["DictionaryIndex", "DictionaryEntry", "IndexSnapshot",
           "validate_wordlist", "pretty_summary", "default_wordlist_path"]
