# wordguard/containers/__init__.py
from wordguard.containers.container import Container
from wordguard.containers.lock import InstanceLockManager

__all__ = ["Container", "InstanceLockManager"]
