"""
noble Core - the extension engine and the event emitter.
"""

from noble.core.emitter import NobleClass
from noble.core.extension import NobleType, extend
from noble.core.properties import PropertyDescriptor, PropertyTable, copy_properties

__all__ = [
    "NobleClass",
    "NobleType",
    "extend",
    "PropertyDescriptor",
    "PropertyTable",
    "copy_properties",
]
