"""kubeadm-install: prepare an Ubuntu host to run as a Kubernetes node.

Core design goals:
- Ordered steps, fail fast on the first error
- Every downloaded artifact is checksum-verified before install
- Versions resolved once and pinned for the whole run
- Centralized logging
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
