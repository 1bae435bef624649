import ctypes as ct
import dataclasses
from typing import Any, Dict, Type, TypeVar

from ..domain.models import Hud, Physics, Properties
from ..infrastructure.layouts import GraphicsPage, PhysicsPage, StaticPage

Record = TypeVar("Record", Hud, Physics, Properties)


def _decode(text: ct.Array) -> str:
    # wchar_t on Windows: UTF-16-LE, NUL terminated
    return bytes(text).decode("utf-16-le", errors="replace").split("\x00", 1)[0]


def _convert(value: Any, kind: Any) -> Any:
    if kind is str:
        return _decode(value)
    if kind is bool:
        return bool(value)
    if isinstance(value, ct.Array):
        return tuple(value)
    return value


class FrameParser:
    """
    Parses raw shared memory pages into immutable domain records.
    Only the fields a record declares are carried over from the page.
    """

    _PAGES: Dict[type, Type[ct.Structure]] = {
        Hud: GraphicsPage,
        Physics: PhysicsPage,
        Properties: StaticPage,
    }

    @classmethod
    def parse(cls, record_cls: Type[Record], data: bytes) -> Record:
        page_cls = cls._PAGES[record_cls]
        size = ct.sizeof(page_cls)
        if len(data) < size:
            raise ValueError(f"{page_cls.__name__} needs {size} bytes, got {len(data)}")

        page = page_cls.from_buffer_copy(data[:size])
        return record_cls(**{
            field.name: _convert(getattr(page, field.name), field.type)
            for field in dataclasses.fields(record_cls)
        })

    @classmethod
    def parse_hud(cls, data: bytes) -> Hud:
        return cls.parse(Hud, data)

    @classmethod
    def parse_physics(cls, data: bytes) -> Physics:
        return cls.parse(Physics, data)

    @classmethod
    def parse_properties(cls, data: bytes) -> Properties:
        return cls.parse(Properties, data)
