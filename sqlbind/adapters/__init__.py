from sqlbind.adapters.dbapi import DBAPIConnection, DBAPIStatement

__all__ = ("DBAPIConnection", "DBAPIStatement")
