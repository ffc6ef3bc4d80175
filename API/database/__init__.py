"""
Database package for the ISP billing tracker.

Usage:
    from database import db, get_db, init_db
    from database.models import IspCustomer, Payment
"""

from .base import Base, BaseModel, TimestampMixin
from .connection import (
    DatabaseConnection,
    db,
    get_db,
    init_db,
    reset_db,
)

# Import all models to ensure they are registered with SQLAlchemy
from .models import *


__all__ = [
    # Base
    'Base',
    'BaseModel',
    'TimestampMixin',

    # Connection
    'DatabaseConnection',
    'db',
    'get_db',
    'init_db',
    'reset_db',
]
