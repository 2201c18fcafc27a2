"""Tests for entity definitions and record creation (models/entity.py)."""

import json
from datetime import datetime, timezone

import pytest

from dynamodb_orm import (
    ComputedGetter,
    Entity,
    EntityConfig,
    EntityRecord,
    SchemaViolationError,
    calculate_update_data,
    define_entity,
)
from dynamodb_orm.models import TrackedDict, TrackedList


class TestDefineEntity:
    """Test entity factory creation."""

    def test_define_entity_with_keywords(self, user_entity):
        assert isinstance(user_entity, Entity)
        assert user_entity.entity_name == "TEST"
        assert user_entity.config.ttl == "_ttl"

    def test_define_entity_from_config(self):
        config = EntityConfig(name="ORDER", ttl="expiresAt")
        entity = define_entity(config)

        assert entity.config is config
        assert set(entity.computed) == {"expiresAt"}

    def test_define_entity_with_name_only(self):
        entity = define_entity("NOTE")

        assert entity.entity_name == "NOTE"
        assert set(entity.computed) == {"_ttl"}

    def test_computed_dicts_are_coerced(self):
        entity = define_entity(name="NOTE", computed={"pk": {"depends_on": ["id"], "get": lambda r: r["id"]}})

        assert isinstance(entity.computed["pk"], ComputedGetter)
        assert entity.computed["pk"].depends_on == ["id"]

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            EntityConfig(name="")


class TestEntityCreation:
    """Test entity creation and attributes."""

    def test_creates_record(self, user):
        assert isinstance(user, EntityRecord)
        assert user.entity_name == "TEST"

    def test_attaches_default_timestamps(self, user):
        assert isinstance(user["_created"], datetime)
        assert isinstance(user["_updated"], datetime)
        assert user["_created"].tzinfo is not None

    def test_attaches_entity_type(self, user):
        assert user["_type"] == "TEST"

    def test_keeps_initial_data(self, user):
        assert user["name"] == "Damian"
        assert user["login"] == "damsos"
        assert user["birthdate"] == datetime(1986, 1, 29, tzinfo=timezone.utc)
        assert user["favColors"] == ["black", "red"]
        assert user["address"] == {"city": "Lisbon", "street": "Avenida"}

    def test_returns_computed_attributes(self, user):
        assert user["pk"] == "TEST#damsos"
        assert user["age"] == 37

    def test_computed_attributes_follow_current_values(self, user):
        user["login"] = "kucyk"

        assert user["pk"] == "TEST#kucyk"

    def test_no_expiry_or_ttl_by_default(self, user):
        assert user.get("_expires") is None
        assert user["_ttl"] is None

    def test_ttl_is_epoch_seconds_of_expiry(self, user):
        expires = datetime(2030, 2, 1, tzinfo=timezone.utc)
        user["_expires"] = expires

        assert user["_ttl"] == int(expires.timestamp())

    def test_custom_ttl_attribute(self):
        entity = define_entity(name="SESSION", ttl="expiresAt")
        record = entity({"_expires": datetime(2030, 1, 1, tzinfo=timezone.utc)})

        assert record["expiresAt"] == 1893456000
        assert record["expiresAt"] < 10 ** 10
        assert "_ttl" not in record

    def test_presents_itself_as_plain_mapping(self, user):
        assert user == {
            "name": "Damian",
            "login": "damsos",
            "email": "dam@wp.pl",
            "birthdate": datetime(1986, 1, 29, tzinfo=timezone.utc),
            "favColors": ["black", "red"],
            "address": {"city": "Lisbon", "street": "Avenida"},
            "_created": user["_created"],
            "_updated": user["_updated"],
            "_type": "TEST",
            "pk": "TEST#damsos",
            "age": 37,
            "_ttl": None,
        }

    def test_metadata_is_not_exposed(self, user):
        assert "_metadata" not in user
        assert "_metadata" not in dict(user)
        assert "_metadata" not in repr(user)
        assert not hasattr(user, "__dict__")

    def test_nested_containers_are_tracked(self, user):
        assert isinstance(user["favColors"], TrackedList)
        assert isinstance(user["address"], TrackedDict)

    def test_dates_are_left_as_leaves(self, user):
        assert type(user["birthdate"]) is datetime

    def test_to_dict_is_plain(self, user):
        data = user.to_dict()

        assert type(data["favColors"]) is list
        assert type(data["address"]) is dict
        assert data["pk"] == "TEST#damsos"
        json.dumps({k: v for k, v in data.items() if not isinstance(v, datetime)})

    def test_input_data_is_copied(self, user_entity):
        colors = ["black"]
        record = user_entity({"login": "a", "birthdate": datetime(2000, 1, 1), "favColors": colors})
        colors.append("red")

        assert record["favColors"] == ["black"]

    def test_reserved_attributes_are_overwritten(self, user_entity):
        old = datetime(2001, 1, 1, tzinfo=timezone.utc)
        record = user_entity({
            "login": "a",
            "birthdate": datetime(2000, 1, 1),
            "_created": old,
            "_updated": old,
            "_type": "OTHER",
        })

        assert record["_created"] != old
        assert record["_updated"] != old
        assert record["_type"] == "TEST"

    def test_supplied_computed_values_are_ignored(self, user_entity):
        record = user_entity({"login": "a", "birthdate": datetime(2000, 1, 1), "pk": "WRONG"})

        assert record["pk"] == "TEST#a"

    def test_cannot_change_computed_attribute(self, user):
        with pytest.raises(SchemaViolationError):
            user["pk"] = "something"

        assert user["pk"] == "TEST#damsos"

    def test_cannot_delete_computed_attribute(self, user):
        with pytest.raises(SchemaViolationError):
            del user["age"]

        assert user["age"] == 37

    def test_static_computed_attribute_is_recalculated(self):
        counter = iter(range(100))
        entity = define_entity(name="COUNTER", computed={"seq": ComputedGetter(get=lambda r: next(counter))})
        record = entity({})

        assert record["seq"] == 0
        assert record["seq"] == 1
        assert entity.computed["seq"].depends_on == []


class TestHydrate:
    """Test rebuilding records from stored items."""

    def test_keeps_stored_timestamps(self, user_entity):
        created = datetime(2020, 5, 1, 12, 0, tzinfo=timezone.utc)
        record = user_entity.hydrate({
            "login": "damsos",
            "birthdate": datetime(1986, 1, 29),
            "_created": created,
            "_updated": created,
            "_type": "TEST",
            "pk": "TEST#damsos",
        })

        assert record["_created"] == created
        assert record["_updated"] == created
        assert record["pk"] == "TEST#damsos"

    def test_starts_without_changes(self, user_entity):
        record = user_entity.hydrate({"login": "damsos", "birthdate": datetime(1986, 1, 29)})

        update_data = calculate_update_data(record)
        assert update_data.set == {}
        assert update_data.remove == []
