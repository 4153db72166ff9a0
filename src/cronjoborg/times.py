from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class _UnixTimestamp(int):
    """Integer count of ``_unit`` since the unix epoch."""

    __slots__ = ()

    _unit = timedelta(seconds=1)

    def time(self) -> datetime:
        return UNIX_EPOCH + self._unit * int(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.int_schema(),
            serialization=core_schema.plain_serializer_function_ser_schema(int),
        )


class Seconds(_UnixTimestamp):
    __slots__ = ()

    _unit = timedelta(seconds=1)


class Milliseconds(_UnixTimestamp):
    __slots__ = ()

    _unit = timedelta(milliseconds=1)


class Microseconds(_UnixTimestamp):
    __slots__ = ()

    _unit = timedelta(microseconds=1)
