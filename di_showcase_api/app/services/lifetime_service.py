"""
Probes that make service lifetimes observable.

The three classes are identical apart from the lifetime they are
registered with in ``core.wiring``.  Each instance gets a random id on
construction, so comparing ids tells whether two resolutions returned
the same object.
"""

import uuid


class LifetimeProbe:
    lifetime = "unknown"

    def __init__(self) -> None:
        self.instance_id = uuid.uuid4().hex


class TransientProbe(LifetimeProbe):
    lifetime = "transient"


class ScopedProbe(LifetimeProbe):
    lifetime = "scoped"


class SingletonProbe(LifetimeProbe):
    lifetime = "singleton"
