"""
Repository layer: async data access per entity
"""
from foody.repositories.base import BaseRepository, Page, normalize_paging
from foody.repositories.users import UserRepository
from foody.repositories.catalog import CategoryRepository, ProductRepository
from foody.repositories.orders import CartRepository, OrderRepository
from foody.repositories.billing import BillRepository
from foody.repositories.engagement import ReviewRepository, AnnouncementRepository

__all__ = [
    'BaseRepository', 'Page', 'normalize_paging',
    'UserRepository',
    'CategoryRepository', 'ProductRepository',
    'CartRepository', 'OrderRepository',
    'BillRepository',
    'ReviewRepository', 'AnnouncementRepository',
]
