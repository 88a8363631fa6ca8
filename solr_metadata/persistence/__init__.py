# ==============================================
# PERSISTENCE (Config store)
# ==============================================
#
# This package holds the dotted-path key-value store where display
# configurations live between requests.
#
# Modules:
# --------
# - config_store.py  → get/set/clear/save on "configs.<name>.<field>" paths
#
# ==============================================

from .config_store import ConfigStore

__all__ = ["ConfigStore"]
