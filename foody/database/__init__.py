"""
Database package initialization
Centralized imports for all database components
"""
from foody.database.base import Base
from foody.database.session import engine, AsyncSessionLocal, get_db, init_models

__all__ = ['Base', 'engine', 'AsyncSessionLocal', 'get_db', 'init_models']
