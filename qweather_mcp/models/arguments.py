"""
Argument schemas for the weather tools.

Each tool validates its untyped argument mapping into one of these models
before any request is made. Every violation is reported, not just the first.
"""
from typing import Any, Literal, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError

from ..errors import ToolValidationError

ForecastDays = Literal["now", "24h", "72h", "168h", "3d", "7d", "10d", "15d", "30d"]
IndicesDays = Literal["1d", "3d"]

HOURLY_FORECASTS = ("24h", "72h", "168h")


class WeatherArguments(BaseModel):
    """Arguments for ``get-weather``."""
    location: str = Field(description="逗号分隔的经纬度信息 (e.g., 116.40,39.90)")
    days: ForecastDays = Field(
        default="now",
        description="预报天数，now为实时天气，24h为24小时预报，72h为72小时预报，168h为168小时预报，3d为3天预报，以此类推",
    )


class CityLookupArguments(BaseModel):
    """Arguments for ``city-lookup``."""
    location: str = Field(description="城市名称，支持模糊搜索")
    adm: Optional[str] = Field(default=None, description="上级行政区划，可选参数")
    range: Optional[str] = Field(default=None, description="搜索范围，可选参数")
    number: int = Field(default=10, ge=1, le=20, description="返回结果数量，1-20，默认10")


class WeatherWarningArguments(BaseModel):
    """Arguments for ``weather-warning``."""
    location: str = Field(description="LocationID或经纬度坐标 (e.g., 101010100 或 116.41,39.92)")
    lang: str = Field(default="zh", description="多语言设置，默认zh")


class IndicesForecastArguments(BaseModel):
    """Arguments for ``indices-forecast``."""
    location: str = Field(description="LocationID或经纬度坐标 (e.g., 101010100 或 116.41,39.92)")
    type: str = Field(description="指数类型ID，多个用英文逗号分隔（如1,2,3）")
    days: IndicesDays = Field(default="1d", description="预报天数，1d或3d")
    lang: str = Field(default="zh", description="多语言设置，默认zh")


ArgumentsT = TypeVar("ArgumentsT", bound=BaseModel)


def validate_arguments(
    tool: str,
    model: Type[ArgumentsT],
    arguments: Optional[Mapping[str, Any]],
) -> ArgumentsT:
    """Validate a raw argument mapping for ``tool``.

    Raises:
        ToolValidationError: listing every failing field as ``(path, message)``
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise ToolValidationError(tool, [("", "Expected an object of arguments")])

    try:
        return model.model_validate(dict(arguments))
    except ValidationError as e:
        violations = [
            (".".join(str(part) for part in error["loc"]), error["msg"])
            for error in e.errors()
        ]
        raise ToolValidationError(tool, violations) from e
