"""Built-in stage components. Importing this package registers them."""

from __future__ import annotations

from .lexical import LexicalMatcher, LexicalPreprocessor
from .list_context import ListContextLoader
from .minimal import MinimalMappingFilter
from .tab_context import TabContextLoader, TabContextRenderer
from .tab_mapping import TabMappingLoader, TabMappingRenderer
from .xml_context import XmlContextLoader, XmlContextRenderer

__all__ = [
    "LexicalMatcher",
    "LexicalPreprocessor",
    "ListContextLoader",
    "MinimalMappingFilter",
    "TabContextLoader",
    "TabContextRenderer",
    "TabMappingLoader",
    "TabMappingRenderer",
    "XmlContextLoader",
    "XmlContextRenderer",
]
