# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests. No live database is needed:
# MySQL and MongoDB are replaced by small in-memory fakes that
# understand exactly the queries this package issues.
#
# FIXTURES:
# ---------
# - store            → ConfigStore backed by a file in tmp_path
# - memory_store     → ConfigStore with no backing file
# - fake_mysql       → FakeMySQL (fetch_all / execute / execute_many)
# - associations     → CmodelAssociationTable over fake_mysql
# - field_service    → ConfigFieldService over store
# - mongo_client     → MongoClient whose pymongo client is a dict of FakeCollection
# - mongo_fields     → MongoFieldService over mongo_client and store
#
# ==============================================

import pytest

from solr_metadata.persistence.config_store import ConfigStore
from solr_metadata.storage.association_table import CmodelAssociationTable
from solr_metadata.storage.field_service import (
    ConfigFieldService,
    MongoFieldService,
    FIELDS_COLLECTION,
)
from solr_metadata.storage.mongo_client import MongoClient


class FakeMySQL:
    """Rows of the association table held in a list."""

    def __init__(self, rows=None):
        self.rows = list(rows or [])
        self.queries = []
        self.has_table = True

    def table_exists(self, table_name):
        return self.has_table

    def fetch_all(self, query, params=None):
        self.queries.append((query, params))
        if "WHERE cmodel IN" in query:
            wanted = set(params)
            return [dict(row) for row in self.rows if row["cmodel"] in wanted]
        if "WHERE configuration_name = %s" in query:
            matches = [dict(row) for row in self.rows if row["configuration_name"] == params[0]]
            return sorted(matches, key=lambda row: row["cmodel"])
        raise AssertionError(f"Unexpected query: {query}")

    def execute(self, query, params=None):
        self.queries.append((query, params))
        if query.startswith("CREATE TABLE"):
            self.has_table = True
            return 0
        if query.startswith("DELETE"):
            before = len(self.rows)
            self.rows = [row for row in self.rows if row["configuration_name"] != params[0]]
            return before - len(self.rows)
        raise AssertionError(f"Unexpected statement: {query}")

    def execute_many(self, query, rows):
        self.queries.append((query, rows))
        for cmodel, configuration_name in rows:
            self.rows.append({"cmodel": cmodel, "configuration_name": configuration_name})
        return len(rows)


class _DeleteResult:
    def __init__(self, deleted_count):
        self.deleted_count = deleted_count


class FakeCollection:
    """Just enough of a pymongo Collection for the field service."""

    def __init__(self):
        self.documents = []
        self.indexes = []

    @staticmethod
    def _matches(doc, query):
        for key, condition in query.items():
            if isinstance(condition, dict) and "$in" in condition:
                if doc.get(key) not in condition["$in"]:
                    return False
            elif doc.get(key) != condition:
                return False
        return True

    def create_index(self, keys, unique=False):
        self.indexes.append((keys, unique))
        return "_".join(f"{name}_{direction}" for name, direction in keys)

    def find(self, query):
        return [dict(doc) for doc in self.documents if self._matches(doc, query)]

    def update_one(self, key, update, upsert=False):
        for doc in self.documents:
            if self._matches(doc, key):
                doc.update(update.get("$set", {}))
                return
        if upsert:
            doc = dict(key)
            doc.update(update.get("$set", {}))
            doc.update(update.get("$setOnInsert", {}))
            self.documents.append(doc)

    def delete_many(self, query):
        before = len(self.documents)
        self.documents = [doc for doc in self.documents if not self._matches(doc, query)]
        return _DeleteResult(before - len(self.documents))


@pytest.fixture
def store(tmp_path):
    """ConfigStore persisted to a temporary JSON file."""
    return ConfigStore(str(tmp_path / "metadata" / "solr_metadata.json"))


@pytest.fixture
def memory_store():
    return ConfigStore()


@pytest.fixture
def fake_mysql():
    return FakeMySQL([
        {"cmodel": "islandora:sp_basic_image", "configuration_name": "images"},
        {"cmodel": "islandora:sp_large_image_cmodel", "configuration_name": "images"},
        {"cmodel": "islandora:bookCModel", "configuration_name": "books"},
    ])


@pytest.fixture
def associations(fake_mysql):
    return CmodelAssociationTable(fake_mysql)


@pytest.fixture
def field_service(store):
    return ConfigFieldService(store)


@pytest.fixture
def fields_collection():
    return FakeCollection()


@pytest.fixture
def mongo_client(fields_collection):
    client = MongoClient(host="localhost", port=27017, database="islandora")
    client.client = {"islandora": {FIELDS_COLLECTION: fields_collection}}
    return client


@pytest.fixture
def mongo_fields(mongo_client, store):
    return MongoFieldService(mongo_client, store)
