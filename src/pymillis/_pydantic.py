"""Pydantic field annotation for millisecond (de)serialization."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Annotated, Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import PydanticCustomError, core_schema

from pymillis._codecs import check_width, codec_for
from pymillis._errors import ERR_MSG_OUT_OF_RANGE, MillisecondRangeError
from pymillis.instant import MonotonicInstant


@dataclass(frozen=True)
class Millis:
    """Marks a field to be carried as an integer count of milliseconds.

    Usage::

        class Timestamps(BaseModel):
            time: Annotated[datetime, Millis()]
            latency: Annotated[timedelta, Millis()]
            deadline: Annotated[MonotonicInstant | None, Millis()] = None

    Attributes:
        strict: When True (the default), only real integers are accepted
            from the wire. When False, pydantic's lax integer parsing applies,
            so numeric strings and integral floats are accepted too.
    """

    strict: bool = True

    def __get_pydantic_core_schema__(
        self, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        codec = codec_for(source_type)

        wire: core_schema.CoreSchema = core_schema.int_schema(strict=self.strict)
        if codec.nullable:
            wire = core_schema.nullable_schema(wire)

        def validate(data: Any, nxt: core_schema.ValidatorFunctionWrapHandler) -> Any:
            if codec.accepts(data):
                return data

            def read(raw: Any) -> int | None:
                millis = nxt(raw)
                return millis if millis is None else check_width(millis)

            try:
                return codec.decode(data, read)
            except MillisecondRangeError as exc:
                raise PydanticCustomError(
                    "millis_out_of_range",
                    ERR_MSG_OUT_OF_RANGE,
                ) from exc

        def serialize(value: Any, nxt: core_schema.SerializerFunctionWrapHandler) -> Any:
            return codec.encode(value, nxt)

        return core_schema.no_info_wrap_validator_function(
            validate,
            wire,
            serialization=core_schema.wrap_serializer_function_ser_schema(
                serialize,
                info_arg=False,
                schema=wire,
            ),
        )


MillisDuration = Annotated[timedelta, Millis()]
MillisDatetime = Annotated[datetime, Millis()]
MillisInstant = Annotated[MonotonicInstant, Millis()]
