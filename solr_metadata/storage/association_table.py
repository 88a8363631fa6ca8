# ==============================================
# CmodelAssociationTable
# ==============================================
#
# PURPOSE:
#   Reads and writes the `islandora_solr_metadata_cmodels` table,
#   which maps content models to the display configuration that
#   applies to objects of that model.
#
#   Table layout:
#     cmodel              VARCHAR(255)
#     configuration_name  VARCHAR(255)
#     PRIMARY KEY (cmodel, configuration_name)
#
#   The table is a second, separate record of which cmodels belong
#   to a configuration (the first is `configs.<name>.cmodels` in the
#   config store). Nothing in this class keeps the two in step.
#
# CLASS: CmodelAssociationTable
# -----------------------------
#   Constructor:
#   ------------
#   - __init__(client, table_name = ASSOCIATION_TABLE)
#       client is anything with fetch_all/execute/execute_many/
#       table_exists (normally a connected MySQLClient).
#
#   Methods:
#   --------
#   - ensure_table() -> bool
#   - find_by_cmodels(cmodels) -> dict[configuration_name, row]
#   - cmodels_for(configuration_name) -> list[str]
#   - replace(configuration_name, cmodels) -> None
#   - delete_configuration(configuration_name) -> int
#
# ==============================================

from typing import Dict, Iterable, List, Any


ASSOCIATION_TABLE = "islandora_solr_metadata_cmodels"


class CmodelAssociationTable:
    def __init__(self, client, table_name: str = ASSOCIATION_TABLE):
        self.client = client
        self.table_name = table_name

    def ensure_table(self) -> bool:
        """
        Create the association table if it doesn't exist.

        Returns:
            True if the table was created, False if it already existed
        """
        if self.client.table_exists(self.table_name):
            return False

        self.client.execute(
            f"CREATE TABLE {self.table_name} ("
            "cmodel VARCHAR(255) NOT NULL, "
            "configuration_name VARCHAR(255) NOT NULL, "
            "PRIMARY KEY (cmodel, configuration_name), "
            "INDEX configuration_name (configuration_name)"
            ")"
        )
        print(f"Created table '{self.table_name}'.")
        return True

    def find_by_cmodels(self, cmodels: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        """
        Find the configurations associated with any of the given cmodels.

        Args:
            cmodels: Content model identifiers

        Returns:
            Dictionary configuration_name -> row. When several cmodels
            map to one configuration the last row returned wins.
            Empty dict if cmodels is empty (no query is issued).
        """
        cmodels = sorted(set(cmodels))
        if not cmodels:
            return {}

        placeholders = ", ".join(["%s"] * len(cmodels))
        rows = self.client.fetch_all(
            f"SELECT cmodel, configuration_name FROM {self.table_name} "
            f"WHERE cmodel IN ({placeholders})",
            tuple(cmodels)
        )
        return {row["configuration_name"]: row for row in rows}

    def cmodels_for(self, configuration_name: str) -> List[str]:
        rows = self.client.fetch_all(
            f"SELECT cmodel FROM {self.table_name} "
            "WHERE configuration_name = %s ORDER BY cmodel",
            (configuration_name,)
        )
        return [row["cmodel"] for row in rows]

    def delete_configuration(self, configuration_name: str) -> int:
        return self.client.execute(
            f"DELETE FROM {self.table_name} WHERE configuration_name = %s",
            (configuration_name,)
        )

    def replace(self, configuration_name: str, cmodels: Iterable[str]) -> None:
        """
        Make the table hold exactly the given cmodels for a configuration.

        Args:
            configuration_name: Configuration to rewrite rows for
            cmodels: The complete new set of cmodels
        """
        self.delete_configuration(configuration_name)
        self.client.execute_many(
            f"INSERT INTO {self.table_name} (cmodel, configuration_name) "
            "VALUES (%s, %s)",
            [(cmodel, configuration_name) for cmodel in sorted(set(cmodels))]
        )
