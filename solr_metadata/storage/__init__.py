# ==============================================
# STORAGE (MySQL + MongoDB)
# ==============================================
#
# This package handles the database side of metadata configuration:
# the cmodel association table in MySQL and the field list backends.
#
# Modules:
# --------
# - mysql_client.py       → MySQL connection and operations
# - association_table.py  → cmodel → configuration_name lookup table
# - mongo_client.py       → MongoDB connection and operations
# - field_service.py      → Field list storage (config store or MongoDB)
#
# ==============================================

from .mysql_client import MySQLClient
from .mongo_client import MongoClient
from .association_table import CmodelAssociationTable, ASSOCIATION_TABLE
from .field_service import (
    FieldConfigService,
    ConfigFieldService,
    MongoFieldService,
    FIELDS_COLLECTION,
)

__all__ = [
    "MySQLClient",
    "MongoClient",
    "CmodelAssociationTable",
    "ASSOCIATION_TABLE",
    "FieldConfigService",
    "ConfigFieldService",
    "MongoFieldService",
    "FIELDS_COLLECTION",
]
