from sqlbind.utils import closing, logging

__all__ = ("closing", "logging")
