"""Pure services: ids, date keys, streaks, card scoring and aggregation.

Submodules are imported directly (``from habitflow.services import habits``);
models depend on ``services.ids`` so this package stays import-free.
"""
