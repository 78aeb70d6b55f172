"""Storage gateways for local directories and Google Drive."""

from .drive import DriveGateway
from .local import LocalFolderGateway
from .rate_limit import RateLimiter

__all__ = ["DriveGateway", "LocalFolderGateway", "RateLimiter"]
