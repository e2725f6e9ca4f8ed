"""
WooCopy: AI product descriptions for WooCommerce stores
"""
__version__ = "1.0.0"
