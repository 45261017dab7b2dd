"""Test fixtures for planner tests."""

from .order_factory import make_item, make_order, make_truck, cube_order

__all__ = ['make_item', 'make_order', 'make_truck', 'cube_order']
