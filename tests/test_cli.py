# ==============================================
# Tests for the CLI
# ==============================================

import pytest

from solr_metadata import accessor, cli
from solr_metadata.config import AppConfig, MongoConfig, MySQLConfig, StoreConfig
from solr_metadata.metadata_config import SolrMetadataConfig
from solr_metadata.models import FieldDetails
from solr_metadata.storage.field_service import FIELDS_COLLECTION
from solr_metadata.storage.mongo_client import MongoClient


@pytest.fixture
def metadata(tmp_path, store, associations, field_service):
    config = AppConfig(
        mysql=MySQLConfig(),
        mongo=MongoConfig(),
        store=StoreConfig(config_path=str(tmp_path / "unused.json")),
    )
    metadata = SolrMetadataConfig(
        config, store=store, associations=associations, field_service=field_service
    )
    metadata.add_configuration("images", "Images", ["islandora:sp_basic_image"])
    metadata.update_fields("images", {
        "dc.title": FieldDetails("dc.title", "Title", 0),
        "dc.creator": FieldDetails("dc.creator", "Creator", 1),
    })
    metadata.update_description("images", "dc.description", "Description", {"max_length": 80})
    return metadata


def test_list(metadata, capsys):
    metadata.add_configuration("books")
    assert cli.main(["list"], metadata=metadata) == 0
    assert capsys.readouterr().out.splitlines()[-2:] == ["books", "images"]


def test_show(metadata, capsys):
    assert cli.main(["show", "images"], metadata=metadata) == 0
    out = capsys.readouterr().out
    assert "Label: Images" in out
    assert "Cmodels: islandora:sp_basic_image" in out
    assert out.index("dc.title") < out.index("dc.creator")
    assert "Description: dc.description (Description)" in out
    assert "'max_length': 80" in out


def test_show_missing(metadata, capsys):
    assert cli.main(["show", "books"], metadata=metadata) == 1
    assert "No configuration named 'books'." in capsys.readouterr().out


def test_delete_requires_confirm(metadata):
    assert cli.main(["delete", "images"], metadata=metadata) == 2
    assert metadata.configuration_exists("images")


def test_delete(metadata):
    assert cli.main(["delete", "images", "--confirm"], metadata=metadata) == 0
    assert not metadata.configuration_exists("images")


def test_lookup(metadata, capsys):
    code = cli.main(
        ["lookup", "fedora-system:FedoraObject-3.0", "islandora:bookCModel"],
        metadata=metadata,
    )
    assert code == 0
    assert "books (via islandora:bookCModel)" in capsys.readouterr().out


def test_lookup_no_match(metadata, capsys):
    assert cli.main(["lookup", "fedora-system:FedoraObject-3.0"], metadata=metadata) == 0
    assert "No matching configurations." in capsys.readouterr().out


def test_init_db(metadata, fake_mysql, capsys):
    fake_mysql.has_table = False
    assert cli.main(["init-db"], metadata=metadata) == 0
    assert "Created table 'islandora_solr_metadata_cmodels'." in capsys.readouterr().out


def test_command_required():
    with pytest.raises(SystemExit):
        cli.main([])


@pytest.mark.parametrize("command", [["show", "a.b"], ["delete", "a.b", "--confirm"]])
def test_invalid_name(metadata, capsys, command):
    assert cli.main(command, metadata=metadata) == 1
    assert "Invalid configuration name: 'a.b'" in capsys.readouterr().out


def test_show_with_mongo_fields(tmp_path, store, associations, mongo_fields, fields_collection, monkeypatch, capsys):
    accessor.add_configuration(store, "images", "Images")
    accessor.update_fields(mongo_fields, "images", {"dc.title": FieldDetails("dc.title", "Title", 0)})

    def connect(self):
        self.client = {"islandora": {FIELDS_COLLECTION: fields_collection}}

    monkeypatch.setattr(MongoClient, "connect", connect)
    monkeypatch.setattr(MongoClient, "disconnect", lambda self: setattr(self, "client", None))

    config = AppConfig(
        mysql=MySQLConfig(),
        mongo=MongoConfig(),
        store=StoreConfig(config_path=str(tmp_path / "unused.json"), field_backend="mongo"),
    )
    metadata = SolrMetadataConfig(config, store=store, associations=associations)

    assert cli.main(["show", "images"], metadata=metadata) == 0
    assert "dc.title → Title" in capsys.readouterr().out
    assert metadata.field_service.mongo.client is None
