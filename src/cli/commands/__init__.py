"""CLI command modules organized by deployment target.

Command Groups:
- gke: Minimal Google Kubernetes Engine deployment
"""

from .gke import gke_app

__all__ = [
    "gke_app",
]
