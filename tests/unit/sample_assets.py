"""Asset types used across the unit tests."""

from mediafs.models.asset import Asset


class Part(Asset, type_tag="MFS::Test::Part"):
    api_attributes = ("Id", "Label")

    @classmethod
    def resolve_path(cls, instance=None):
        if instance is None:
            return ["part"]
        if instance.id is not None:
            return ["part", instance.id]
        return None


class Person(Asset, type_tag="MFS::Test::Person"):
    api_attributes = ("Login", "FullName")

    @classmethod
    def resolve_path(cls, instance=None):
        if instance is None:
            return ["person"]
        if instance.login:
            return ["person", instance.login]
        return None


class Widget(Asset, type_tag="MFS::Test::Widget"):
    api_attributes = ("Name", "Colour", "Enabled", "Owner")
    api_collections = ("Parts",)

    @classmethod
    def resolve_path(cls, instance=None):
        if instance is None:
            return ["widget"]
        if instance.name:
            return ["widget", instance.name]
        return None


class Gadget(Widget, type_tag="MFS::Test::Gadget"):
    api_attributes = ("Voltage",)
