# ==============================================
# Models (Data Classes)
# ==============================================
#
# PURPOSE:
#   Typed records for everything stored under `configs.<name>` in
#   the config store. Each record converts to/from the plain dicts
#   the store holds, and validates its input on the way in.
#
# CONSTANTS:
# ----------
# - FEDORA_OBJECT_CMODEL
#     The base content model every Fedora object carries. It never
#     discriminates between configurations and is always dropped
#     before a cmodel lookup.
#
# - CONFIG_ROOT / config_path(configuration_name, *keys)
#     Store paths. Every reader and writer of `configs.<name>` goes
#     through config_path, which rejects empty or dotted names.
#
# CLASSES:
# --------
# - FieldDetails (dataclass)
#     One displayed field of a configuration.
#     - solr_field: str        → Source Solr field (unique per configuration)
#     - display_label: str     → Label shown next to the value
#     - weight: int            → Display order, lower first
#
# - TruncationSettings (dataclass)
#     Parameters handed to the host's truncation routine. All optional.
#     - truncation_type, max_length, word_safe, ellipsis, min_wordsafe_length
#
# - DescriptionBlock (dataclass)
#     - description_field: str | None
#     - description_label: str | None
#     - truncation: TruncationSettings
#
# - Configuration (dataclass)
#     Full view of one named configuration.
#     - name, label, cmodels, fields (ordered), description
#
#   Every class has:
#     - to_dict() -> dict                    → Serialize for the store
#     - from_dict(data) -> cls (classmethod) → Deserialize + validate
#
# FUNCTION:
# ---------
# - sort_fields(fields) -> dict[str, FieldDetails]
#     Order by weight. Ties keep insertion order.
#
# ==============================================

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List, Mapping, Iterable


FEDORA_OBJECT_CMODEL = "fedora-system:FedoraObject-3.0"

CONFIG_ROOT = "configs"


def config_path(configuration_name: str, *keys: str) -> str:
    """
    Build the dotted store path for a configuration.

    Args:
        configuration_name: Machine name of the configuration
        keys: Further path segments below the configuration root

    Returns:
        e.g. "configs.my_config.description"

    Raises:
        ValueError: the name is empty or contains a dot
    """
    if not configuration_name or "." in configuration_name:
        raise ValueError(f"Invalid configuration name: {configuration_name!r}")
    return ".".join((CONFIG_ROOT, configuration_name) + keys)


def _optional_int(value: Any, name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{name} must be a whole number, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {value!r}")


def _optional_bool(value: Any) -> Optional[bool]:
    # Form checkboxes post "0" / "1"
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false", "no", "off")
    return bool(value)


@dataclass
class FieldDetails:
    """A single field shown by a display configuration."""

    solr_field: str
    display_label: str = ""
    weight: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "solr_field": self.solr_field,
            "display_label": self.display_label,
            "weight": self.weight,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FieldDetails":
        """
        Build a FieldDetails from a stored or submitted mapping.

        Args:
            data: Mapping with at least "solr_field"

        Returns:
            A FieldDetails instance

        Raises:
            KeyError: solr_field is missing
            ValueError: weight is not an integer
        """
        weight = _optional_int(data.get("weight"), "weight")
        return cls(
            solr_field=data["solr_field"],
            display_label=data.get("display_label") or "",
            weight=weight if weight is not None else 0,
        )


@dataclass
class TruncationSettings:
    """
    Truncation rules for the description value.

    Stored as-is and consumed by the host's truncation routine;
    nothing here truncates text.
    """

    truncation_type: Optional[str] = None
    max_length: Optional[int] = None
    word_safe: Optional[bool] = None
    ellipsis: Optional[str] = None
    min_wordsafe_length: Optional[int] = None

    def is_empty(self) -> bool:
        return all(value is None for value in self.to_dict().values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "truncation_type": self.truncation_type,
            "max_length": self.max_length,
            "word_safe": self.word_safe,
            "ellipsis": self.ellipsis,
            "min_wordsafe_length": self.min_wordsafe_length,
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "TruncationSettings":
        if not data:
            return cls()
        return cls(
            truncation_type=data.get("truncation_type") or None,
            max_length=_optional_int(data.get("max_length"), "max_length"),
            word_safe=_optional_bool(data.get("word_safe")),
            ellipsis=data.get("ellipsis"),
            min_wordsafe_length=_optional_int(
                data.get("min_wordsafe_length"), "min_wordsafe_length"
            ),
        )


@dataclass
class DescriptionBlock:
    """The designated description field of a configuration."""

    description_field: Optional[str] = None
    description_label: Optional[str] = None
    truncation: TruncationSettings = field(default_factory=TruncationSettings)

    def is_empty(self) -> bool:
        return (
            self.description_field is None
            and self.description_label is None
            and self.truncation.is_empty()
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "description_field": self.description_field,
            "description_label": self.description_label,
            # An unset truncation is stored as null, not as a dict of nulls
            "truncation": None if self.truncation.is_empty() else self.truncation.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "DescriptionBlock":
        if not data:
            return cls()
        return cls(
            description_field=data.get("description_field") or None,
            description_label=data.get("description_label"),
            truncation=TruncationSettings.from_dict(data.get("truncation")),
        )


def sort_fields(fields: Iterable[FieldDetails]) -> Dict[str, FieldDetails]:
    """
    Order fields for display.

    Args:
        fields: FieldDetails in insertion order

    Returns:
        Dictionary solr_field -> FieldDetails, lowest weight first.
        sorted() is stable, so equal weights keep insertion order.
    """
    ordered = sorted(fields, key=lambda details: details.weight)
    return {details.solr_field: details for details in ordered}


@dataclass
class Configuration:
    """
    Everything stored for one named display configuration.

    The name is the only identifier; it is the key under `configs`
    and the value of `configuration_name` in the association table.
    """

    name: str
    label: Optional[str] = None
    cmodels: List[str] = field(default_factory=list)
    fields: Dict[str, FieldDetails] = field(default_factory=dict)
    description: DescriptionBlock = field(default_factory=DescriptionBlock)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "cmodels": list(self.cmodels),
            "fields": {
                solr_field: details.to_dict()
                for solr_field, details in self.fields.items()
            },
            "description": self.description.to_dict(),
        }

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> "Configuration":
        """
        Rebuild a Configuration from the subtree stored at `configs.<name>`.

        Args:
            name: Configuration name
            data: The stored subtree

        Returns:
            A Configuration with fields in display order
        """
        raw_fields = data.get("fields") or {}
        return cls(
            name=name,
            label=data.get("label"),
            cmodels=list(data.get("cmodels") or []),
            fields=sort_fields(
                FieldDetails.from_dict({"solr_field": key, **value})
                for key, value in raw_fields.items()
            ),
            description=DescriptionBlock.from_dict(data.get("description")),
        )
