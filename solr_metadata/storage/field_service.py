# ==============================================
# Field Configuration Services
# ==============================================
#
# PURPOSE:
#   Own the storage of per-configuration field lists. The accessor
#   layer only ever talks to the service contract below, so where
#   fields actually live is the service's business.
#
# CONTRACT: FieldConfigService
# ----------------------------
#   - get_fields(configuration_name) -> dict[solr_field, FieldDetails]
#       All fields in display order (weight, then insertion order).
#   - set_fields(fields, configuration_name) -> None
#       Upsert. Existing solr_field keys are overwritten in place.
#   - delete_fields(fields, configuration_name) -> None
#       Remove named fields. Unknown names are ignored.
#
# IMPLEMENTATIONS:
# ----------------
# - ConfigFieldService(store)
#     Fields live at `configs.<name>.fields` in the ConfigStore.
#     Solr field names may contain dots ("dc.title"), so the whole
#     fields object is read, changed and written back rather than
#     addressed per field.
#
# - MongoFieldService(mongo_client, store, collection_name)
#     One document per (configuration_name, solr_field). A `seq`
#     counter set on insert records insertion order for tie-breaks.
#     The configuration itself still lives in the ConfigStore:
#     set_fields creates an empty `configs.<name>` root when none
#     exists, so configuration_exists sees the write.
#
# Both services build every path or key with config_path, so an
# invalid configuration name raises ValueError before anything is
# read or written.
#
# ==============================================

from typing import Dict, Iterable, Mapping

from solr_metadata.models import FieldDetails, config_path, sort_fields


class FieldConfigService:
    """Base class for field list storage backends."""

    def get_fields(self, configuration_name: str) -> Dict[str, FieldDetails]:
        raise NotImplementedError

    def set_fields(self, fields: Mapping[str, FieldDetails], configuration_name: str) -> None:
        raise NotImplementedError

    def delete_fields(self, fields: Iterable[str], configuration_name: str) -> None:
        raise NotImplementedError


class ConfigFieldService(FieldConfigService):
    def __init__(self, store):
        self.store = store

    @staticmethod
    def _path(configuration_name: str) -> str:
        return config_path(configuration_name, "fields")

    def get_fields(self, configuration_name: str) -> Dict[str, FieldDetails]:
        stored = self.store.get(self._path(configuration_name)) or {}
        return sort_fields(
            FieldDetails.from_dict({"solr_field": key, **value})
            for key, value in stored.items()
        )

    def set_fields(self, fields: Mapping[str, FieldDetails], configuration_name: str) -> None:
        path = self._path(configuration_name)
        stored = self.store.get(path) or {}
        for solr_field, details in fields.items():
            # Assigning an existing key keeps its position in the dict
            stored[solr_field] = details.to_dict()
        self.store.set(path, stored)
        self.store.save()

    def delete_fields(self, fields: Iterable[str], configuration_name: str) -> None:
        path = self._path(configuration_name)
        stored = self.store.get(path)
        if not stored:
            return

        removed = [name for name in fields if stored.pop(name, None) is not None]
        if removed:
            self.store.set(path, stored)
            self.store.save()


FIELDS_COLLECTION = "solr_metadata_fields"


class MongoFieldService(FieldConfigService):
    def __init__(self, mongo_client, store, collection_name: str = FIELDS_COLLECTION):
        self.mongo = mongo_client
        self.store = store
        self.collection_name = collection_name

    def ensure_indexes(self) -> None:
        self.mongo.ensure_index(
            self.collection_name,
            [("configuration_name", 1), ("solr_field", 1)],
            unique=True,
        )

    def _query(self, configuration_name: str) -> dict:
        config_path(configuration_name)
        return {"configuration_name": configuration_name}

    def _register(self, configuration_name: str) -> None:
        root = config_path(configuration_name)
        if self.store.get(root) is None:
            self.store.set(root, {})
            self.store.save()

    def get_fields(self, configuration_name: str) -> Dict[str, FieldDetails]:
        documents = self.mongo.find(self.collection_name, self._query(configuration_name))
        # Order by insertion first; sort_fields then orders by weight stably
        documents.sort(key=lambda doc: doc.get("seq", 0))
        return sort_fields(FieldDetails.from_dict(doc) for doc in documents)

    def set_fields(self, fields: Mapping[str, FieldDetails], configuration_name: str) -> None:
        query = self._query(configuration_name)
        existing = self.mongo.find(self.collection_name, query) if fields else []
        next_seq = max((doc.get("seq", 0) for doc in existing), default=0) + 1

        for solr_field, details in fields.items():
            self.mongo.upsert_one(
                self.collection_name,
                {**query, "solr_field": solr_field},
                {
                    "display_label": details.display_label,
                    "weight": details.weight,
                },
                on_insert={"seq": next_seq},
            )
            next_seq += 1

        self._register(configuration_name)

    def delete_fields(self, fields: Iterable[str], configuration_name: str) -> None:
        query = self._query(configuration_name)
        names = list(fields)
        if not names:
            return
        self.mongo.delete_many(
            self.collection_name,
            {**query, "solr_field": {"$in": names}},
        )
