"""
mysqlprovisioner - MySQL database and application user provisioning tool
"""

__version__ = "0.1.0"

from .core import MySQLProvisioner
from .errors import ProvisionerError

__all__ = ["MySQLProvisioner", "ProvisionerError"]
