"""Domain layer for ledgerly application."""

_SERVICES = {
    "TransactionService": "ledgerly.domain.transaction",
    "CategoryService": "ledgerly.domain.category",
    "GroupService": "ledgerly.domain.group",
    "TagService": "ledgerly.domain.tag",
    "LoaderService": "ledgerly.domain.loader",
    "SplitService": "ledgerly.domain.split",
}

__all__ = list(_SERVICES)


# Services import the database layer, which imports domain.entities; resolve
# them lazily so that import does not cycle back through this package.
def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
