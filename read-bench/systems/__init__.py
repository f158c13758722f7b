"""
Storage backends implementing the storage read port.
"""

from .port import ObjectLocator, ReadStream, StorageReadPort

__all__ = ['ObjectLocator', 'ReadStream', 'StorageReadPort']
