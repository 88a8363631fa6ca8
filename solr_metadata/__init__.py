# ==============================================
# Solr Metadata Display Configuration
# ==============================================
#
# Package Structure:
#
# solr_metadata/
# ├── persistence/        # Dotted-path config store (JSON file)
# ├── storage/            # MySQL association table, MongoDB, field services
# ├── models.py           # Typed configuration records
# ├── accessor.py         # Read/write operations taking explicit handles
# ├── metadata_config.py  # Accessor wired from AppConfig
# ├── config.py           # Configuration management
# └── cli.py              # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
