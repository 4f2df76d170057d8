"""
Models Package

Exports all models for easy importing.
"""

from storefront.models.user import User, CartItem
from storefront.models.product import Product
from storefront.models.order import Order, OrderItem

__all__ = ['User', 'CartItem', 'Product', 'Order', 'OrderItem']
