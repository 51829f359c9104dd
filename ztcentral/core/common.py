"""
Shared constants for the ztcentral package.
"""
__version__ = "0.3.0"

PRODUCT_NAME = "py-ztcentral"
DEFAULT_API_URL = "https://my.zerotier.com/api"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = f"{PRODUCT_NAME}/{__version__}"
