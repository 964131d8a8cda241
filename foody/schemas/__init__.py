"""
Pydantic request/response models
"""
from foody.schemas.common import Pagination, MessageResponse, first_error_message

__all__ = ['Pagination', 'MessageResponse', 'first_error_message']
