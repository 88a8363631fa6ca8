# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - MySQLConfig (dataclass)
#     host: str          (default "localhost")
#     port: int          (default 3306)
#     user: str          (default "root")
#     password: str      (default "root")
#     database: str      (default "islandora")
#
# - MongoConfig (dataclass)
#     host: str          (default "localhost")
#     port: int          (default 27017)
#     user: str | None   (default None)
#     password: str | None (default None)
#     database: str      (default "islandora")
#
# - StoreConfig (dataclass)
#     config_path: str   (default "metadata/solr_metadata.json")
#     field_backend: str (default "config", one of FIELD_BACKENDS)
#
# - AppConfig (dataclass)
#     mysql: MySQLConfig
#     mongo: MongoConfig
#     store: StoreConfig
#
# FUNCTION:
# ---------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# USAGE:
# ------
#   from solr_metadata.config import get_config
#   config = get_config()
#   print(config.mysql.host)
#   print(config.store.field_backend)
#
# ==============================================

import os
from dataclasses import dataclass
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv


# Where field lists live: inside the config store, or in a MongoDB collection
FIELD_BACKENDS = ("config", "mongo")


@dataclass
class MySQLConfig:
    """MySQL database configuration (holds the cmodel association table)."""
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = "root"
    database: str = "islandora"


@dataclass
class MongoConfig:
    """MongoDB database configuration (used by the mongo field backend)."""
    host: str = "localhost"
    port: int = 27017
    user: Optional[str] = None
    password: Optional[str] = None
    database: str = "islandora"


@dataclass
class StoreConfig:
    """Config store location and field backend selection."""
    config_path: str = "metadata/solr_metadata.json"
    field_backend: str = "config"

    def __post_init__(self):
        if self.field_backend not in FIELD_BACKENDS:
            raise ValueError(
                f"Unknown field backend '{self.field_backend}', "
                f"expected one of {FIELD_BACKENDS}"
            )


@dataclass
class AppConfig:
    """Main application configuration."""
    mysql: MySQLConfig
    mongo: MongoConfig
    store: StoreConfig


# Singleton instance
_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.
    
    Returns:
        AppConfig: Application configuration
    """
    global _config_instance
    
    if _config_instance is not None:
        return _config_instance
    
    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)
    
    mysql_config = MySQLConfig(
        host=os.getenv("MYSQL_HOST", "localhost"),
        port=int(os.getenv("MYSQL_PORT", "3306")),
        user=os.getenv("MYSQL_USER", "root"),
        password=os.getenv("MYSQL_PASSWORD", "root"),
        database=os.getenv("MYSQL_DATABASE", "islandora")
    )
    
    mongo_config = MongoConfig(
        host=os.getenv("MONGO_HOST", "localhost"),
        port=int(os.getenv("MONGO_PORT", "27017")),
        user=os.getenv("MONGO_USER") or None,
        password=os.getenv("MONGO_PASSWORD") or None,
        database=os.getenv("MONGO_DATABASE", "islandora")
    )
    
    store_config = StoreConfig(
        config_path=os.getenv("CONFIG_STORE_PATH", "metadata/solr_metadata.json"),
        field_backend=os.getenv("FIELD_BACKEND", "config").strip().lower()
    )
    
    _config_instance = AppConfig(
        mysql=mysql_config,
        mongo=mongo_config,
        store=store_config,
    )
    
    return _config_instance


def reset_config() -> None:
    """Drop the cached singleton so the next get_config() re-reads the env."""
    global _config_instance
    _config_instance = None
