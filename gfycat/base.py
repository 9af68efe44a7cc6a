"""
Definitions of base classes employed across multiple modules to avoid circular import errors.
"""
import abc
import enum
import inspect
from typing import TYPE_CHECKING, NewType

if TYPE_CHECKING:
    from typing import Any, List, Optional, Union

    from gfycat.typedefs import AnyKey

# pylint: disable=E1120,no-value-for-parameter


class _Const(type):
    def __setattr__(cls, key, value):
        raise TypeError(f"Constant [{cls.__name__}.{key}] is not modifiable!")

    def __setitem__(cls, key, value):
        _Const.__setattr__(cls, key, value)  # pragma: no cover

    def __contains__(cls, item):
        return cls.get(item) is not None

    @abc.abstractmethod
    def get(cls, key):
        raise NotImplementedError


class Constants(object, metaclass=_Const):
    """
    Constants container that provides similar functionalities to :class:`ExtendedEnum` without explicit Enum membership.
    """

    @classmethod
    def __members__(cls):
        members = set(cls.__dict__) - set(object.__dict__)
        members = [member for member in members if not inspect.ismethod(getattr(cls, member))]
        return [member for member in members if not isinstance(member, str) or not member.startswith("_")]

    @classmethod
    def get(cls, key_or_value, default=None):
        # type: (AnyKey, Optional[Any]) -> Any
        if isinstance(key_or_value, str):
            upper_key = key_or_value.upper()
        else:
            upper_key = key_or_value
        if upper_key in cls.names():
            return cls.__dict__.get(upper_key, default)
        if key_or_value in cls.values():
            return key_or_value
        return default

    @classmethod
    def names(cls):
        # type: () -> List[str]
        """
        Returns the member names assigned to corresponding constant elements.
        """
        return list(cls.__members__())

    @classmethod
    def values(cls):
        # type: () -> List[AnyKey]
        """
        Returns the literal values assigned to corresponding constant elements.
        """
        return [getattr(cls, member) for member in cls.__members__()]


class _EnumMeta(enum.EnumMeta):
    def __contains__(cls, member):
        """
        Allows checking if item is member of the enum by value without having to manually convert to enum member.
        """
        if isinstance(member, cls):
            return super(_EnumMeta, cls).__contains__(member)
        return cls.get(member) is not None

    @abc.abstractmethod
    def get(cls, key):
        raise NotImplementedError


class ExtendedEnum(enum.Enum, metaclass=_EnumMeta):
    """
    Utility :class:`enum.Enum` methods.

    Create an extended enum with these utilities as follows.

    .. code-block:: python

        class CustomEnum(ExtendedEnum):
            ITEM_A = "A"
            ITEM_B = "B"

    .. warning::
        Must not define any enum value here to allow inheritance by subclasses.
    """

    @classmethod
    def names(cls):
        # type: () -> List[str]
        """
        Returns the member names assigned to corresponding enum elements.
        """
        return list(cls.__members__)

    @classmethod
    def values(cls):
        # type: () -> List[AnyKey]
        """
        Returns the literal values assigned to corresponding enum elements.
        """
        return [m.value for m in cls.__members__.values()]                      # pylint: disable=E1101

    @classmethod
    def get(cls, key_or_value, default=None):
        # type: (Union[AnyKey, EnumType], Optional[Any]) -> Optional[EnumType]
        """
        Finds an enum entry by defined name or its value.

        Returns the entry directly if it is already a valid enum.
        Names are matched case-insensitively, and dashes are considered equivalent to underscores.
        """
        members = [member for member in cls]
        if key_or_value in members:                                             # pylint: disable=E1133
            return key_or_value
        if isinstance(key_or_value, str):
            key_name = key_or_value.strip().replace("-", "_").upper()
        else:
            key_name = None
        for m_key, m_val in cls.__members__.items():                            # pylint: disable=E1101
            if key_name == m_key or key_or_value == m_val.value:                # pylint: disable=R1714
                return m_val
        return default

    @property
    def option(self):
        # type: () -> str
        """
        Returns the command line option representation of the enum element (i.e.: ``animal-first``).
        """
        return self.name.lower().replace("_", "-")  # pylint: disable=E1101,no-member


if TYPE_CHECKING:
    EnumType = NewType("EnumType", ExtendedEnum)
