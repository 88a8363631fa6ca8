# ==============================================
# Metadata Configuration Accessor
# ==============================================
#
# PURPOSE:
#   The read/write operations a UI layer uses to manage Solr metadata
#   display configurations. Each function is one narrow read or
#   read-modify-write against the backends it is handed:
#
#     store          → ConfigStore (configs.<name>.* paths)
#     associations   → CmodelAssociationTable (cmodel → configuration_name)
#     field_service  → FieldConfigService (per-configuration field lists)
#
#   Nothing is cached between calls. Absent configurations, fields
#   and associations give empty results; backend failures propagate.
#
# FUNCTIONS:
# ----------
#   CMODEL ASSOCIATIONS:
#   - get_associations_by_cmodels(associations, cmodels) -> dict
#   - get_associations(associations, configuration_name) -> list[str]
#   - get_cmodels(store, configuration_name) -> dict[str, str]
#   - update_cmodels(store, associations, configuration_name, cmodels)
#
#   FIELDS:
#   - get_fields(field_service, configuration_name) -> dict
#   - add_fields(field_service, configuration_name, fields)
#   - update_fields(field_service, configuration_name, fields)
#   - delete_fields(field_service, configuration_name, fields)
#
#   CONFIGURATION LIFECYCLE:
#   - add_configuration(store, configuration_name, label, cmodels)
#   - configuration_exists(store, configuration_name) -> bool
#   - get_configuration_names(store) -> list[str]
#   - get_configuration(store, field_service, configuration_name)
#   - delete_configuration(store, configuration_name)
#   - retrieve_description(store, configuration_name) -> DescriptionBlock
#   - update_description(store, configuration_name, description_field,
#                        description_label, truncation_data)
#
# ==============================================

from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from solr_metadata.models import (
    CONFIG_ROOT,
    FEDORA_OBJECT_CMODEL,
    Configuration,
    DescriptionBlock,
    FieldDetails,
    TruncationSettings,
    config_path,
)


def _discriminating(cmodels: Iterable[str]) -> set:
    # Every object has the Fedora base model, so it never selects a configuration
    return set(cmodels) - {FEDORA_OBJECT_CMODEL}


# ----------------------------------------------
# Cmodel associations
# ----------------------------------------------

def get_associations_by_cmodels(associations, cmodels: Iterable[str]) -> Dict[str, Dict[str, Any]]:
    """
    Find the configurations that apply to an object with the given cmodels.

    Args:
        associations: CmodelAssociationTable
        cmodels: The object's content models

    Returns:
        Dictionary configuration_name -> association row, one entry per
        configuration however many of the cmodels map to it
    """
    return associations.find_by_cmodels(_discriminating(cmodels))


def get_associations(associations, configuration_name: str) -> List[str]:
    """Cmodels the association table links to a configuration."""
    return associations.cmodels_for(configuration_name)


def get_cmodels(store, configuration_name: str) -> Dict[str, str]:
    """
    The cmodels a configuration declares, keyed by themselves.

    Returns:
        {cmodel: cmodel}, ready to use as form options. Empty if the
        configuration or its cmodel list is absent.
    """
    cmodels = store.get(config_path(configuration_name, "cmodels")) or []
    return {cmodel: cmodel for cmodel in cmodels}


def update_cmodels(store, associations, configuration_name: str, cmodels: Iterable[str]) -> List[str]:
    """
    Set a configuration's cmodels in the config store and the table.

    The store is saved first, then the table rows for the
    configuration are replaced, so both sources hold the same list.

    Args:
        store: ConfigStore
        associations: CmodelAssociationTable
        configuration_name: Configuration to update
        cmodels: Complete new cmodel list

    Returns:
        The list that was written (sorted, without the Fedora base model)
    """
    declared = sorted(_discriminating(cmodels))
    store.set(config_path(configuration_name, "cmodels"), declared)
    store.save()
    associations.replace(configuration_name, declared)
    return declared


# ----------------------------------------------
# Fields
# ----------------------------------------------

def _coerce_fields(
    fields: Mapping[str, Union[FieldDetails, Mapping[str, Any]]]
) -> Dict[str, FieldDetails]:
    coerced = {}
    for solr_field, details in fields.items():
        if not isinstance(details, FieldDetails):
            details = FieldDetails.from_dict({"solr_field": solr_field, **details})
        if details.solr_field != solr_field:
            raise ValueError(
                f"Field keyed '{solr_field}' names solr_field '{details.solr_field}'"
            )
        coerced[solr_field] = details
    return coerced


def get_fields(field_service, configuration_name: str) -> Dict[str, FieldDetails]:
    """Fields of a configuration in display order."""
    return field_service.get_fields(configuration_name)


def update_fields(field_service, configuration_name: str, fields) -> None:
    """
    Insert or overwrite fields of a configuration.

    Args:
        field_service: FieldConfigService
        configuration_name: Configuration to update
        fields: solr_field -> FieldDetails (or a mapping of its
            attributes; a missing solr_field is taken from the key)

    Raises:
        ValueError: a field's solr_field disagrees with its key, or its
            weight is not an integer
    """
    field_service.set_fields(_coerce_fields(fields), configuration_name)


def add_fields(field_service, configuration_name: str, fields) -> None:
    """Same as update_fields. Kept for callers of the older API."""
    update_fields(field_service, configuration_name, fields)


def delete_fields(field_service, configuration_name: str, fields: Iterable[str]) -> None:
    """Remove fields by solr_field. Unknown names are ignored."""
    field_service.delete_fields(list(fields), configuration_name)


# ----------------------------------------------
# Configuration lifecycle
# ----------------------------------------------

def add_configuration(
    store,
    configuration_name: str,
    label: Optional[str] = None,
    cmodels: Iterable[str] = (),
) -> None:
    """
    Create an empty configuration.

    Only the config store is written. Use update_cmodels to also
    register the cmodels in the association table.

    Raises:
        ValueError: a configuration with this name already exists
    """
    if configuration_exists(store, configuration_name):
        raise ValueError(f"Configuration '{configuration_name}' already exists")

    store.set(config_path(configuration_name), {
        "label": label,
        "cmodels": sorted(_discriminating(cmodels)),
        "fields": {},
    })
    store.save()


def configuration_exists(store, configuration_name: str) -> bool:
    return store.get(config_path(configuration_name)) is not None


def get_configuration_names(store) -> List[str]:
    return sorted((store.get(CONFIG_ROOT) or {}).keys())


def get_configuration(store, field_service, configuration_name: str) -> Optional[Configuration]:
    """
    Full typed view of a configuration.

    Fields come from the field service, so this works for either
    field backend.

    Returns:
        The Configuration, or None if it doesn't exist
    """
    data = store.get(config_path(configuration_name))
    if data is None:
        return None

    configuration = Configuration.from_dict(configuration_name, data)
    configuration.fields = field_service.get_fields(configuration_name)
    return configuration


def delete_configuration(store, configuration_name: str) -> None:
    """
    Remove a configuration from the config store.

    Deleting an absent configuration does nothing. Rows in the
    association table are left alone.
    """
    if store.clear(config_path(configuration_name)):
        store.save()
        print(f"Deleted configuration '{configuration_name}'.")


def retrieve_description(store, configuration_name: str) -> DescriptionBlock:
    """
    Read the description field, label and truncation settings.

    Returns:
        DescriptionBlock; unset attributes are None
    """
    return DescriptionBlock.from_dict(
        store.get(config_path(configuration_name, "description"))
    )


def update_description(
    store,
    configuration_name: str,
    description_field: Optional[str],
    description_label: Optional[str],
    truncation_data: Union[TruncationSettings, Mapping[str, Any], None] = None,
) -> None:
    """
    Set or clear the description block.

    An empty description_field clears all three attributes. The three
    values are staged together and persisted with one save().

    Args:
        store: ConfigStore
        configuration_name: Configuration to update
        description_field: Solr field holding the description
        description_label: Label shown for the description
        truncation_data: TruncationSettings or a mapping of its attributes
    """
    if not description_field:
        block = DescriptionBlock()
    else:
        if not isinstance(truncation_data, TruncationSettings):
            truncation_data = TruncationSettings.from_dict(truncation_data)
        block = DescriptionBlock(
            description_field=description_field,
            description_label=description_label,
            truncation=truncation_data,
        )

    values = block.to_dict()
    for key in ("description_field", "description_label", "truncation"):
        store.set(config_path(configuration_name, "description", key), values[key])
    store.save()
