"""
VTCS Shop - Vulnerable Demo Web Application
INTENTIONALLY VULNERABLE - FOR CYBER RANGE TRAINING ONLY
"""

from vtcs_shop.app import create_app

__version__ = "1.0.0"

__all__ = ["create_app", "__version__"]
