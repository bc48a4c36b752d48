import msgspec


class BaseStruct(msgspec.Struct):
    """Base struct for all Sakai schemas."""


class CamelizedBaseStruct(BaseStruct, rename="camel"):
    """Camelized Base Struct"""
