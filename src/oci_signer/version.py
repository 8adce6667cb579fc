"""Version information for the OCI HTTP signer package"""

__version__ = "0.1.0"
