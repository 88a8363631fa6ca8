# ==============================================
# SolrMetadataConfig — Wired Accessor
# ==============================================
#
# PURPOSE:
#   Build the three backends from AppConfig and expose every accessor
#   operation as a method, so callers that don't want to pass handles
#   around get one object to hold.
#
#   ┌────────────────────────────────────────────────┐
#   │               SolrMetadataConfig               │
#   │                                                │
#   │   ConfigStore ◄──── StoreConfig.config_path    │
#   │                                                │
#   │   CmodelAssociationTable                       │
#   │       └── MySQLClient ◄──── MySQLConfig        │
#   │                                                │
#   │   FieldConfigService                           │
#   │       ├── "config": ConfigFieldService(store)  │
#   │       └── "mongo":  MongoFieldService          │
#   │               └── MongoClient ◄── MongoConfig  │
#   └────────────────────────────────────────────────┘
#
# CLASS: SolrMetadataConfig
# -------------------------
#   Constructor:
#   ------------
#   - __init__(config=None, store=None, associations=None, field_service=None)
#       Anything passed in is used as-is; anything missing is built
#       from config (loaded from .env when not given).
#
#   Lifecycle:
#   ----------
#   - open(include_associations=True)
#       Connect the database clients this instance built. With
#       include_associations=False only the field backend connects.
#       A failed connect disconnects whatever was already connected.
#   - close() → disconnect them
#   - connected(include_associations=True) → open/close as a context
#   - __enter__ / __exit__ for `with SolrMetadataConfig() as metadata:`
#
#   Public Methods:
#   ---------------
#   One per function in solr_metadata.accessor, minus the handle
#   arguments.
#
# ==============================================

from contextlib import contextmanager
from typing import Optional

from solr_metadata import accessor
from solr_metadata.config import AppConfig, get_config
from solr_metadata.persistence.config_store import ConfigStore
from solr_metadata.storage.association_table import CmodelAssociationTable
from solr_metadata.storage.field_service import ConfigFieldService, MongoFieldService
from solr_metadata.storage.mongo_client import MongoClient
from solr_metadata.storage.mysql_client import MySQLClient


class SolrMetadataConfig:
    def __init__(
        self,
        config: Optional[AppConfig] = None,
        store=None,
        associations=None,
        field_service=None,
    ):
        self._config = config or get_config()
        # Clients built here are connected by open() and closed by close()
        self._table_clients = []
        self._field_clients = []

        self.store = store or ConfigStore(self._config.store.config_path)

        if associations is None:
            mysql = MySQLClient.from_config(self._config.mysql)
            self._table_clients.append(mysql)
            associations = CmodelAssociationTable(mysql)
        self.associations = associations

        if field_service is None:
            field_service = self._build_field_service()
        self.field_service = field_service

    def _build_field_service(self):
        if self._config.store.field_backend == "mongo":
            mongo = MongoClient.from_config(self._config.mongo)
            self._field_clients.append(mongo)
            return MongoFieldService(mongo, self.store)
        return ConfigFieldService(self.store)

    @property
    def _owned_clients(self):
        return self._table_clients + self._field_clients

    def open(self, include_associations: bool = True) -> "SolrMetadataConfig":
        """
        Connect the database clients this instance built.

        Args:
            include_associations: False leaves MySQL unconnected, for
                work that only touches the store and the field service

        If any client fails to connect, the ones already connected are
        disconnected before the error propagates.
        """
        clients = self._owned_clients if include_associations else self._field_clients
        try:
            for client in clients:
                client.connect()
            if isinstance(self.field_service, MongoFieldService):
                self.field_service.ensure_indexes()
        except Exception:
            self.close()
            raise
        return self

    def close(self) -> None:
        for client in self._owned_clients:
            client.disconnect()

    @contextmanager
    def connected(self, include_associations: bool = True):
        self.open(include_associations)
        try:
            yield self
        finally:
            self.close()

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # --- Cmodel associations ---

    def get_associations_by_cmodels(self, cmodels):
        return accessor.get_associations_by_cmodels(self.associations, cmodels)

    def get_associations(self, configuration_name):
        return accessor.get_associations(self.associations, configuration_name)

    def get_cmodels(self, configuration_name):
        return accessor.get_cmodels(self.store, configuration_name)

    def update_cmodels(self, configuration_name, cmodels):
        return accessor.update_cmodels(
            self.store, self.associations, configuration_name, cmodels
        )

    # --- Fields ---

    def get_fields(self, configuration_name):
        return accessor.get_fields(self.field_service, configuration_name)

    def add_fields(self, configuration_name, fields):
        accessor.add_fields(self.field_service, configuration_name, fields)

    def update_fields(self, configuration_name, fields):
        accessor.update_fields(self.field_service, configuration_name, fields)

    def delete_fields(self, configuration_name, fields):
        accessor.delete_fields(self.field_service, configuration_name, fields)

    # --- Configuration lifecycle ---

    def add_configuration(self, configuration_name, label=None, cmodels=()):
        accessor.add_configuration(self.store, configuration_name, label, cmodels)

    def configuration_exists(self, configuration_name):
        return accessor.configuration_exists(self.store, configuration_name)

    def get_configuration_names(self):
        return accessor.get_configuration_names(self.store)

    def get_configuration(self, configuration_name):
        return accessor.get_configuration(
            self.store, self.field_service, configuration_name
        )

    def delete_configuration(self, configuration_name):
        accessor.delete_configuration(self.store, configuration_name)

    def retrieve_description(self, configuration_name):
        return accessor.retrieve_description(self.store, configuration_name)

    def update_description(
        self, configuration_name, description_field, description_label, truncation_data=None
    ):
        accessor.update_description(
            self.store,
            configuration_name,
            description_field,
            description_label,
            truncation_data,
        )
