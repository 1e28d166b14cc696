"""
Storefront - e-commerce backend (accounts, inventory, orders)
"""
__version__ = "1.0.0"
