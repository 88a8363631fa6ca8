# ==============================================
# MongoClient
# ==============================================
#
# PURPOSE:
#   Manages the MongoDB connection used when field lists are kept
#   in a MongoDB collection instead of the config store.
#
# CLASS: MongoClient
# ------------------
#   Stateful — holds connection to MongoDB.
#
#   Constructor:
#   ------------
#   - __init__(host, port, database, user=None, password=None)
#
#   Methods:
#   --------
#   - connect() -> None
#       Establish connection and ping the server.
#
#   - disconnect() -> None
#       Close connection.
#
#   - ensure_index(collection_name, keys, unique=False) -> str
#       Create an index if it doesn't exist. Return its name.
#
#   - find(collection_name, query) -> list[dict]
#       Query documents matching filter.
#
#   - upsert_one(collection_name, key, values, on_insert=None) -> None
#       Update the document matching key, inserting it if absent.
#       on_insert values are only written when a new document is created.
#
#   - delete_many(collection_name, query) -> int
#       Delete matching documents. Return count deleted.
#
#   Context Manager:
#   ----------------
#   - __enter__ / __exit__ for `with MongoClient(...) as db:` usage.
#
# ==============================================

from pymongo import MongoClient as PyMongoClient
from pymongo.errors import ConnectionFailure, OperationFailure


class MongoClient:
    def __init__(self, host, port, database, user=None, password=None):
        # Store connection params. Don't connect yet.
        self.host = host
        self.port = port
        self.database = database
        self.user = user
        self.password = password
        self.client = None  # Will hold the actual MongoDB client connection

    @classmethod
    def from_config(cls, config) -> "MongoClient":
        """Build an unconnected client from a MongoConfig."""
        return cls(
            host=config.host,
            port=config.port,
            database=config.database,
            user=config.user,
            password=config.password,
        )

    def connect(self):
        # Establish connection to MongoDB.
        try:
            if self.user and self.password:
                uri = f"mongodb://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"
            else:
                uri = f"mongodb://{self.host}:{self.port}/{self.database}"
            self.client = PyMongoClient(uri)
            # Test connection
            self.client.admin.command('ping')
            print("Connected to MongoDB successfully.")
        except ConnectionFailure as e:
            print(f"Could not connect to MongoDB: {e}")
            raise
        except OperationFailure as e:
            print(f"Authentication failed: {e}")
            raise

    def disconnect(self):
        # Close connection.
        if self.client:
            self.client.close()
            print("Disconnected from MongoDB.")
            self.client = None

    def _collection(self, collection_name):
        if not self.client:
            raise RuntimeError("Not connected to MongoDB")
        return self.client[self.database][collection_name]

    def ensure_index(self, collection_name, keys, unique: bool = False):
        # create_index is a no-op when an identical index exists
        return self._collection(collection_name).create_index(keys, unique=unique)

    def find(self, collection_name, query):
        # Query documents matching filter.
        return list(self._collection(collection_name).find(query))

    def upsert_one(self, collection_name, key, values, on_insert=None):
        update = {"$set": values}
        if on_insert:
            update["$setOnInsert"] = on_insert
        self._collection(collection_name).update_one(key, update, upsert=True)

    def delete_many(self, collection_name, query) -> int:
        result = self._collection(collection_name).delete_many(query)
        return result.deleted_count

    def __enter__(self):
        # For `with MongoClient(...) as db:` usage.
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
