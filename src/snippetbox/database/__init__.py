from .base import Base
from .session import build_engine, build_sessionmaker, create_schema
from .types import UTCDateTime, utcnow

__all__ = ["Base", "build_engine", "build_sessionmaker", "create_schema", "UTCDateTime", "utcnow"]
