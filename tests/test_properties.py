"""Property Propagator Tests.

Tests for descriptors, property tables and copy_properties.
"""

import unittest

from pydantic import ValidationError

from noble.core.errors import (
    NonConfigurablePropertyError,
    NotExtensibleError,
    ReadOnlyPropertyError,
)
from noble.core.properties import (
    PropertyDescriptor,
    PropertyTable,
    as_property_table,
    copy_properties,
    descriptor_for,
)


class PropertyDescriptorTest(unittest.TestCase):
    """Test the descriptor model."""

    def test_defaults_are_open_data_descriptor(self) -> None:
        desc = PropertyDescriptor(value=1)

        self.assertFalse(desc.is_accessor)
        self.assertTrue(desc.writable)
        self.assertTrue(desc.enumerable)
        self.assertTrue(desc.configurable)
        self.assertTrue(desc.is_writable_data)

    def test_accessor_cannot_carry_value(self) -> None:
        with self.assertRaises(ValidationError):
            PropertyDescriptor(value=1, get=lambda receiver: 2)

    def test_accessor_is_never_writable_data(self) -> None:
        desc = PropertyDescriptor(get=lambda receiver: 2)

        self.assertTrue(desc.is_accessor)
        self.assertFalse(desc.is_writable_data)

    def test_frozen_copy_locks_descriptor(self) -> None:
        desc = PropertyDescriptor(value=1).frozen()

        self.assertFalse(desc.writable)
        self.assertFalse(desc.configurable)
        self.assertTrue(desc.enumerable)
        self.assertEqual(desc.value, 1)

    def test_descriptor_for_bag_entries(self) -> None:
        explicit = PropertyDescriptor(value=3, writable=False)
        prop = property(lambda self: 1)

        self.assertIs(descriptor_for(explicit), explicit)
        self.assertTrue(descriptor_for(prop).is_accessor)
        self.assertIs(descriptor_for(prop).get, prop.fget)
        self.assertEqual(descriptor_for("plain").value, "plain")


class PropertyTableTest(unittest.TestCase):
    """Test own-member tables."""

    def setUp(self) -> None:
        self.table = PropertyTable(owner="thing")
        self.table.define("visible", PropertyDescriptor(value=1))
        self.table.define("hidden", PropertyDescriptor(value=2, enumerable=False))

    def test_names_include_non_enumerable(self) -> None:
        self.assertEqual(self.table.names(), ["visible", "hidden"])
        self.assertEqual(self.table.keys(), ["visible"])
        self.assertIn("hidden", self.table)
        self.assertEqual(len(self.table), 2)

    def test_assign_updates_writable_member(self) -> None:
        self.table.assign("visible", 10)

        self.assertEqual(self.table.get("visible").value, 10)

    def test_assign_keeps_other_flags(self) -> None:
        self.table.assign("hidden", 20)

        self.assertEqual(self.table.get("hidden").value, 20)
        self.assertFalse(self.table.get("hidden").enumerable)

    def test_assign_refuses_read_only(self) -> None:
        self.table.define("locked", PropertyDescriptor(value=1, writable=False))

        with self.assertRaisesRegex(ReadOnlyPropertyError, "read only"):
            self.table.assign("locked", 2)
        self.assertEqual(self.table.get("locked").value, 1)

    def test_assign_calls_accessor_setter(self) -> None:
        seen = []
        self.table.define("acc", PropertyDescriptor(
            get=lambda receiver: None,
            set=lambda receiver, value: seen.append((receiver, value)),
        ))

        self.table.assign("acc", 5, receiver="me")

        self.assertEqual(seen, [("me", 5)])

    def test_assign_to_getter_only_accessor_fails(self) -> None:
        self.table.define("acc", PropertyDescriptor(get=lambda receiver: 1))

        with self.assertRaises(ReadOnlyPropertyError):
            self.table.assign("acc", 5)

    def test_delete_respects_configurable(self) -> None:
        self.table.define("fixed", PropertyDescriptor(value=1, configurable=False))

        self.table.delete("visible")
        self.assertNotIn("visible", self.table)

        with self.assertRaisesRegex(NonConfigurablePropertyError, "non-configurable"):
            self.table.delete("fixed")
        with self.assertRaises(AttributeError):
            self.table.delete("missing")

    def test_freeze_locks_everything(self) -> None:
        self.table.freeze()

        with self.assertRaises(ReadOnlyPropertyError):
            self.table.assign("visible", 3)
        with self.assertRaises(NonConfigurablePropertyError):
            self.table.delete("hidden")
        with self.assertRaisesRegex(NotExtensibleError, "not extensible"):
            self.table.assign("new", 1)


class CopyPropertiesTest(unittest.TestCase):
    """Test the property propagator."""

    def test_copies_full_descriptors(self) -> None:
        source = PropertyTable()
        hidden = PropertyDescriptor(value=1, enumerable=False, configurable=False)
        source.define("hidden", hidden)
        destination = PropertyTable()

        result = copy_properties(destination, source)

        self.assertIs(result, destination)
        self.assertEqual(destination.get("hidden"), hidden)
        self.assertFalse(destination.get("hidden").enumerable)

    def test_overwrites_writable_members(self) -> None:
        destination = PropertyTable()
        destination.define("value", PropertyDescriptor(value="old"))

        copy_properties(destination, {"value": "new"})

        self.assertEqual(destination.get("value").value, "new")

    def test_skips_non_writable_members(self) -> None:
        destination = PropertyTable()
        destination.define("name", PropertyDescriptor(value="kept", writable=False))

        copy_properties(destination, {"name": "replaced", "other": 1})

        self.assertEqual(destination.get("name").value, "kept")
        self.assertEqual(destination.get("other").value, 1)

    def test_skips_existing_accessors(self) -> None:
        destination = PropertyTable()
        getter = lambda receiver: "kept"  # noqa: E731
        destination.define("acc", PropertyDescriptor(get=getter))

        copy_properties(destination, {"acc": "replaced"})

        self.assertIs(destination.get("acc").get, getter)

    def test_frozen_destination_refuses_new_members(self) -> None:
        destination = PropertyTable(owner="locked")
        destination.define("kept", PropertyDescriptor(value=1))
        destination.freeze()

        with self.assertRaisesRegex(NotExtensibleError, "not extensible"):
            copy_properties(destination, {"added": 2})
        self.assertNotIn("added", destination)

    def test_frozen_destination_still_skips_existing_members(self) -> None:
        destination = PropertyTable()
        destination.define("kept", PropertyDescriptor(value=1))
        destination.freeze()

        copy_properties(destination, {"kept": 2})

        self.assertEqual(destination.get("kept").value, 1)

    def test_frozen_base_prototype_refuses_copied_members(self) -> None:
        from noble import NobleClass
        from noble.core.extension import own_prototype

        with self.assertRaises(NotExtensibleError):
            copy_properties(own_prototype(NobleClass), {"added": 1})
        self.assertFalse(hasattr(NobleClass(), "added"))

    def test_mapping_source_builds_descriptors(self) -> None:
        table = as_property_table({
            "plain": 1,
            "computed": property(lambda self: 2),
            "locked": PropertyDescriptor(value=3, writable=False),
        })

        self.assertEqual(table.names(), ["plain", "computed", "locked"])
        self.assertTrue(table.get("computed").is_accessor)
        self.assertFalse(table.get("locked").writable)

    def test_non_mapping_source_raises_native_error(self) -> None:
        with self.assertRaises((TypeError, ValueError)):
            copy_properties(PropertyTable(), 42)


if __name__ == "__main__":
    unittest.main()
