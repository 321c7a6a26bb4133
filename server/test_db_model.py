import dataclasses
import unittest
from db_model import MongoDbConfig
from errors import ConfigurationError

class TestMongoDbConfig(unittest.TestCase):
    def test_defaults(self):
        config = MongoDbConfig.merged()
        self.assertIsNone(config.connection_uri)
        self.assertIsNone(config.database_name)
        self.assertEqual(config.collection_name, "UserData")
        self.assertEqual(config.primary_key_field, "userId")

    def test_overrides_win(self):
        config = MongoDbConfig.merged({"collection_name": "Players", "database_name": "game"})
        self.assertEqual(config.collection_name, "Players")
        self.assertEqual(config.database_name, "game")
        self.assertEqual(config.primary_key_field, "userId")

    def test_unknown_option(self):
        with self.assertRaises(ConfigurationError) as ctx:
            MongoDbConfig.merged({"uri": "mongodb://h/"})
        self.assertEqual(ctx.exception.field, "uri")

    def test_frozen(self):
        config = MongoDbConfig.merged()
        with self.assertRaises(dataclasses.FrozenInstanceError):
            config.database_name = "x"

    def test_validate_reports_first_missing(self):
        with self.assertRaises(ConfigurationError) as ctx:
            MongoDbConfig(database_name="db", primary_key_field=None).validate()
        self.assertEqual(ctx.exception.field, "connection_uri")

        with self.assertRaises(ConfigurationError) as ctx:
            MongoDbConfig(connection_uri="mongodb://h/", primary_key_field="").validate()
        self.assertEqual(ctx.exception.field, "primary_key_field")

    def test_validate_ok(self):
        MongoDbConfig(connection_uri="mongodb://h/", database_name="db").validate()

if __name__ == "__main__":
    unittest.main()
